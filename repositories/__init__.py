"""
repositories/ - Data Access Layer
==================================
Parcel persistence: ParcelRepository runs every SQL statement against the
`parcel` table and returns Parcel domain objects. Domain errors live in
repositories.errors; driver errors pass through unchanged.
"""
