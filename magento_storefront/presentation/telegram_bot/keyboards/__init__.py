"""
Inline keyboards
"""
