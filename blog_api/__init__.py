"""Solid Blogs API: layered CRUD service for blog posts."""
