"""Utilities package for recipe-vault."""
