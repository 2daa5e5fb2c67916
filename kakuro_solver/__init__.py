"""
Kakuro puzzle solver (backtracking).
"""
