"""
Legacy role adapter package.

Translates the coarse Owner/Admin/Member/Guest (and project Owner/Editor/
Viewer) labels into the granular permission model so role assignments made
before the migration keep their exact behaviour.

Modules of interest:
- matrix: The frozen capability sets of each legacy label.
- adapter: Label parsing and synthetic role construction.
"""
