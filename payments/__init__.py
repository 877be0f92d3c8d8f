"""
Payments app: checkout creation and payment webhook processing.
"""
