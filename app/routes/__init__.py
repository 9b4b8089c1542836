"""
Routes package for the Blog API.

This package contains route blueprints:
- api: REST endpoints for blog posts
"""
