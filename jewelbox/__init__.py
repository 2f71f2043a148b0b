"""
JewelBox - back office for a jewelry business
"""
