"""Application services behind the API routers."""
