"""
Artroom database configuration.
Stores registered beacons and the art pieces attached to them.

Structure:
- beacon: One document per physical beacon {proxID, majorID, minorID}
- art: Catalog metadata enriched with the embedded beacon, curator
  comment, image URL and collaboration binder ID
"""

class Collections:
    """Collection names in the artroom database."""
    BEACON = "beacon"
    ART = "art"
    
    # Index definitions for each collection
    INDEXES = {
        "beacon": [
            {
                "keys": [("minorID", 1)],
                "name": "beaconIndex",
                "unique": True,
                "sparse": True,
            },
        ],
        "art": [
            {
                # Embedded beacon matched field by field, plus the title
                "keys": [
                    ("beacon.proxID", 1),
                    ("beacon.majorID", 1),
                    ("beacon.minorID", 1),
                    ("title", 1),
                ],
                "name": "artIndex",
                "unique": True,
                "sparse": True,
            },
        ],
    }


def beacon_match(beacon: dict) -> dict:
    """
    Build the art query matching an embedded beacon.
    
    Args:
        beacon: Beacon document ({proxID, majorID, minorID})
        
    Returns:
        Filter on the art collection's embedded beacon fields
    """
    return {
        "beacon.proxID": beacon["proxID"],
        "beacon.majorID": beacon["majorID"],
        "beacon.minorID": beacon["minorID"],
    }
