"""Command-line interface for XPath Copier"""
