"""Utility helpers for jsonblade."""
