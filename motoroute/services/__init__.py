"""
Business services: role policy, ownership, validation, access control and
the trip lifecycle.
"""
