"""Motivation Hub HTTP backend."""
