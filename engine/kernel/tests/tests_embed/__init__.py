"""
Embed Template Test Suite

1. test_embed_snippet.py - Copy-paste iframe snippet and its options
2. test_embed_page.py - Standalone /embed/{id} page
"""
