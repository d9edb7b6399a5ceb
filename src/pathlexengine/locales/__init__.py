"""Bundled dictionaries, one <locale>.yml per built-in locale.

Loaded by PackageDictionaryLoader at Localization construction.
"""
