# config/badges_config.py

from enum import Enum


class BadgeTier(int, Enum):
    bronze   = 1
    silver   = 2
    gold     = 3
    platinum = 4


class BadgeCategory(str, Enum):
    milestone = "milestone"
    regional  = "regional"
    special   = "special"


# Initial catalog, inserted once when the badges table is empty.
# Criteria payloads keep the field names the catalog has always been
# stored with; api/badges/criteria.py normalizes them on read.
INITIAL_BADGES = [
    # ─── Exploration milestones ─────────────────────────────────────────────────
    {
        "name": "Explorer",
        "description": "Visit 10 different states",
        "image_url": "/badges/explorer.svg",
        "criteria": {"type": "states_count", "value": 10},
        "tier": BadgeTier.bronze,
        "category": BadgeCategory.milestone,
    },
    {
        "name": "Adventurer",
        "description": "Visit 25 different states",
        "image_url": "/badges/adventurer.svg",
        "criteria": {"type": "states_count", "value": 25},
        "tier": BadgeTier.silver,
        "category": BadgeCategory.milestone,
    },
    {
        "name": "Voyager",
        "description": "Visit 40 different states",
        "image_url": "/badges/voyager.svg",
        "criteria": {"type": "states_count", "value": 40},
        "tier": BadgeTier.gold,
        "category": BadgeCategory.milestone,
    },
    {
        "name": "Globetrotter",
        "description": "Visit all 50 states - you've seen it all!",
        "image_url": "/badges/globetrotter.svg",
        "criteria": {"type": "states_count", "value": 50},
        "tier": BadgeTier.platinum,
        "category": BadgeCategory.milestone,
    },

    # ─── Regional ───────────────────────────────────────────────────────────────
    {
        "name": "West Coast Explorer",
        "description": "Visit all West Coast states (CA, OR, WA)",
        "image_url": "/badges/west-coast.svg",
        "criteria": {
            "type": "region_complete",
            "region": "West Coast",
            "value": ["CA", "OR", "WA"],
        },
        "tier": BadgeTier.silver,
        "category": BadgeCategory.regional,
    },
    {
        "name": "East Coast Traveler",
        "description": "Visit all East Coast states (ME, NH, MA, RI, CT, NY, NJ, DE, MD, VA, NC, SC, GA, FL)",
        "image_url": "/badges/east-coast.svg",
        "criteria": {
            "type": "region_complete",
            "region": "East Coast",
            "value": ["ME", "NH", "MA", "RI", "CT", "NY", "NJ", "DE", "MD", "VA", "NC", "SC", "GA", "FL"],
        },
        "tier": BadgeTier.gold,
        "category": BadgeCategory.regional,
    },
    {
        "name": "Great Lakes Voyager",
        "description": "Visit all Great Lakes states (MN, WI, MI, IL, IN, OH, PA, NY)",
        "image_url": "/badges/great-lakes.svg",
        "criteria": {
            "type": "region_complete",
            "region": "Great Lakes",
            "value": ["MN", "WI", "MI", "IL", "IN", "OH", "PA", "NY"],
        },
        "tier": BadgeTier.silver,
        "category": BadgeCategory.regional,
    },
    {
        "name": "Southern Charm",
        "description": "Visit all Southern states (TX, OK, AR, LA, MS, AL, TN, KY, WV, VA, NC, SC, GA, FL)",
        "image_url": "/badges/southern.svg",
        "criteria": {
            "type": "region_complete",
            "region": "South",
            "value": ["TX", "OK", "AR", "LA", "MS", "AL", "TN", "KY", "WV", "VA", "NC", "SC", "GA", "FL"],
        },
        "tier": BadgeTier.gold,
        "category": BadgeCategory.regional,
    },

    # ─── Special ────────────────────────────────────────────────────────────────
    {
        "name": "Four Corners",
        "description": "Visit the Four Corners states (AZ, CO, NM, UT)",
        "image_url": "/badges/four-corners.svg",
        "criteria": {"type": "specific_states", "value": ["AZ", "CO", "NM", "UT"]},
        "tier": BadgeTier.silver,
        "category": BadgeCategory.special,
    },
    {
        "name": "Mountain Climber",
        "description": "Visit all Rocky Mountain states (MT, ID, WY, UT, CO, NM, AZ)",
        "image_url": "/badges/mountain.svg",
        "criteria": {"type": "specific_states", "value": ["MT", "ID", "WY", "UT", "CO", "NM", "AZ"]},
        "tier": BadgeTier.silver,
        "category": BadgeCategory.special,
    },
    {
        "name": "Hawaiian Paradise",
        "description": "Visit Hawaii",
        "image_url": "/badges/hawaii.svg",
        "criteria": {"type": "specific_states", "value": ["HI"]},
        "tier": BadgeTier.bronze,
        "category": BadgeCategory.special,
    },
    {
        "name": "Alaskan Frontier",
        "description": "Visit Alaska",
        "image_url": "/badges/alaska.svg",
        "criteria": {"type": "specific_states", "value": ["AK"]},
        "tier": BadgeTier.bronze,
        "category": BadgeCategory.special,
    },
]
