"""
Profession catalog service.

This package aggregates professional profiles and the editable profession
taxonomy into the sector-grouped catalog served to the marketplace's
category and search screens.
"""
