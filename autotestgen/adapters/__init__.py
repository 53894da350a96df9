"""Adapters implementing the autotestgen ports."""
