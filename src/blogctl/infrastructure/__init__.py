"""Infrastructure layer — content source, markdown pipeline, templates.

This layer depends on stdlib and third-party libs (Markdown, Pygments, Jinja2).
The site graph bridges filesystem records and domain models for services.
"""
