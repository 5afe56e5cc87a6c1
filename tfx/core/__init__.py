"""Core crawling and validation logic."""
