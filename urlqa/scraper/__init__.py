"""Scraper package: relay fetch, text extraction and page formatting."""

from urlqa.scraper.extractor import extract_description, extract_text, extract_title, parse_html
from urlqa.scraper.fetcher import PageFetcher, ProxyStrategy, proxy_from_template
from urlqa.scraper.formatter import format_content
from urlqa.scraper.models import ScrapedPage, WebsiteMetadata

__all__ = [
    "PageFetcher",
    "ProxyStrategy",
    "proxy_from_template",
    "parse_html",
    "extract_text",
    "extract_title",
    "extract_description",
    "format_content",
    "ScrapedPage",
    "WebsiteMetadata",
]
