"""
Mr. Better Boss sidebar backend.

AI estimates, schedules and chat layered over JobTread, with a lightweight
token-based identity module.
"""
