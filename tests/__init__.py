"""
Test suite for the Blog API.

This package contains:
- unit/: author mapping, model serialisation and store operations
- integration/: HTTP tests through the Flask test client
- contracts/: responses validated against contracts/openapi.yaml
- smoke/: critical-path checks against a live server
"""
