"""
Seniority anchors of the system roles.
"""

# Owner is short-circuited before any comparison; the value only keeps it on top
OWNER_POSITION = 2 ** 53 - 1
PROJECT_OWNER_POSITION = OWNER_POSITION - 1
ADMIN_POSITION = 100
MEMBER_POSITION = 0
GUEST_POSITION = -1

# Highest position of an actor holding no roles
BELOW_GUEST_POSITION = float("-inf")
