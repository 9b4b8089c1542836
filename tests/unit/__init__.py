"""Unit tests for models and the document store."""
