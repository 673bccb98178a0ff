"""FastAPI dataset server and server-side rendering."""
