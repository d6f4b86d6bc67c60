"""
News Module
===========

Personalized headlines for authenticated users:
- Query building from user preferences
- News provider (NewsAPI) lookup over httpx
- Static sample and fallback content when the provider is unavailable
"""
