"""
strapi-source.

Pulls content from a Strapi CMS and reshapes it into content graph nodes:
rich-text fields become StrapiRichText nodes and media become File nodes,
both cached by content so unchanged data is not processed twice.
"""

__version__ = "0.1.0"
