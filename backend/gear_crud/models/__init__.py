# Models package init
"""
Gear CRUD — Record Models
==========================

    - gear.py:    Armor and Weapon (request body, response body and stored document)
    - health.py:  HealthCheckResponse (failed /health body)
"""

from gear_crud.models.gear import Armor, GearRecord, Weapon
from gear_crud.models.health import HealthCheckResponse

__all__ = ["Armor", "GearRecord", "HealthCheckResponse", "Weapon"]
