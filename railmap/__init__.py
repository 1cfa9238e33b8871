"""Top-level package for the railmap project.

This package builds an in-memory graph of a rail network from
OpenStreetMap entities and runs two analyses on it: partitioning the
network into regions grown from seed stations, and weighted shortest
path search between arbitrary entities.
"""
