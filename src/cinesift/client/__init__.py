"""CineSift Python SDK — Client library for the CineSift API.

Provides both async and sync clients for interacting with a CineSift server.

Quick start::

    from cinesift.client import CineSiftClient

    client = CineSiftClient("http://localhost:8080")
    page = client.search_by_actors(["Chris Evans", "Scarlett Johansson"], operator="AND")
"""

from cinesift.client.client import AsyncCineSiftClient, CineSiftClient

__all__ = ["AsyncCineSiftClient", "CineSiftClient"]
