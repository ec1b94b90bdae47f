"""Reusable patterns shared by the API verticals.

Each module is a self-contained building block: a pure-function rules
engine for request validation and a generic async repository layer.
"""
