"""
Test suite for the fulfillment engine.

Run all tests: pytest
Run unit tests only: pytest tests/unit/
Run specific file: pytest tests/unit/test_template_selector.py -v
"""
