"""Tournament catalogue: which divisions each tournament runs."""
import logging
import os

import yaml

logger = logging.getLogger(__name__)

TOURNAMENTS_FILENAME = 'tournaments.yaml'

_LEAGUE_DIVISIONS = ['Oro', 'Plata', 'Bronce', 'Cobre', 'Hierro']
_CUP_DIVISIONS = ['Elite', 'Standard', 'Beginner']


def get_default_tournaments() -> dict:
    """Return the built-in tournament -> divisions catalogue."""
    return {
        'PPC Winter 2025/2026': list(_LEAGUE_DIVISIONS),
        'WPPC Winter 2025/2026': list(_LEAGUE_DIVISIONS),
        'PPC Spring 2026': list(_LEAGUE_DIVISIONS),
        'PPC Cup': list(_CUP_DIVISIONS),
    }


def load_tournaments(data_dir) -> dict:
    """Load the catalogue from <data_dir>/tournaments.yaml, falling back to the defaults."""
    path = os.path.join(data_dir, TOURNAMENTS_FILENAME)
    if not os.path.exists(path):
        return get_default_tournaments()
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger.warning(f'Failed to parse {path}: {e}')
        return get_default_tournaments()
    if not isinstance(data, dict) or not data:
        return get_default_tournaments()
    return {str(name): [str(d) for d in (divisions or [])] for name, divisions in data.items()}


def all_divisions(catalogue) -> list:
    """Every division name in the catalogue, in first-seen order."""
    seen = []
    for divisions in catalogue.values():
        for division in divisions:
            if division not in seen:
                seen.append(division)
    return seen
