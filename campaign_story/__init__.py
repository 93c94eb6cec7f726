"""
Campaign Story Builder.

Guides a fundraising-campaign creator through a fixed questionnaire and
turns the answers into a first-person story draft.
"""

__version__ = "1.0.0"
