"""
Preview Renderer Test Suite

1. test_preview_document.py - Page structure, verbatim css/js inlining
2. test_preview_placeholders.py - Loading and stopped pages
"""
