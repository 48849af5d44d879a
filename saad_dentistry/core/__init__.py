"""
Core domain types for the SaaD Dentistry booking/payment core.
"""
