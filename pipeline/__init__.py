"""
Document conversion pipeline stages.

Current stages:
1. convert - Render each PDF page and transcribe it to Markdown with a vision model
"""
