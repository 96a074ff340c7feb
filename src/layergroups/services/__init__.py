"""Service layer: group placement and the ServiceResult contract.

Services operate on a host layer stack and never perform file I/O.
"""
