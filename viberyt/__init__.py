"""
VibeRyt license service Django project.
"""
