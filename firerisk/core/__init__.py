"""
Core computation: inference, diagram layout, history and scenarios.
"""
