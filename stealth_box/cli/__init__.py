"""
StealthBox - CLI Package
"""
