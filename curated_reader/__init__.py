"""Curated Reader: fetch a curated RSS feed and read its posts as Markdown."""
