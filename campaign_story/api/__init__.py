"""
HTTP API for the campaign story wizard.
"""
