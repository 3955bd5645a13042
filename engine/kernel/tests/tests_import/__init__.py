"""
JSON Import Test Suite

1. test_import_valid.py - Accepted payloads and the documents they produce
2. test_import_rejections.py - Rejected payloads and their messages
"""
