"""Weak reference allocation tracker."""
