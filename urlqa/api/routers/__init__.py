"""Route groups mounted by :func:`urlqa.api.app.create_app`."""
