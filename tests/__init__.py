"""
strapi-source Test Suite.

- unit/: cleaning, HTTP client, discovery, normalization and collaborator tests
- integration/: the full source pipeline against a mocked Strapi API
- conftest.py: Shared fixtures and test configuration

Run tests with: pytest
"""
