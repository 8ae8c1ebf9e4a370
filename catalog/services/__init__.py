"""
Read-side use cases built on top of the repositories.

``rating_stats`` derives the average rating of a resource; ``consistency``
reports ratings/feedback that point at resources which no longer exist.
"""
