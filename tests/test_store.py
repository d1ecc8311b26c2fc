"""
Tests for the storage adapters and the tournament catalogue.
"""
import pytest
import sys
import os
import yaml

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from league.models import MatchResult
from league.reference import (
    TOURNAMENTS_FILENAME, all_divisions, get_default_tournaments, load_tournaments,
)
from league.repositories import ResultRepository
from league.store import MATCHES, SCHEDULED, USERS, MemoryStore, YamlStore


class TestMemoryStore:
    """Tests for the in-memory store."""

    def test_starts_empty(self):
        store = MemoryStore()
        for key in (USERS, MATCHES, SCHEDULED):
            assert store.load(key) == []

    def test_loaded_items_are_copies(self):
        """Mutating a loaded list never changes the store."""
        store = MemoryStore({USERS: [{'name': 'Ana'}]})
        items = store.load(USERS)
        items[0]['name'] = 'Changed'
        items.append({'name': 'Bea'})
        assert store.load(USERS) == [{'name': 'Ana'}]

    def test_unknown_collection(self):
        with pytest.raises(KeyError):
            MemoryStore().load('teams')
        with pytest.raises(KeyError):
            MemoryStore({'teams': []})


class TestYamlStore:
    """Tests for the YAML file store."""

    def test_missing_file_is_empty(self, tmp_path):
        store = YamlStore(str(tmp_path))
        assert store.load(MATCHES) == []

    def test_save_and_load(self, tmp_path):
        """Saved items come back in order and the file is keyed by collection."""
        store = YamlStore(str(tmp_path))
        store.save(SCHEDULED, [{'id': '1', 'player1': 'Ana'}, {'id': '2', 'player1': 'Bea'}])
        assert [d['id'] for d in store.load(SCHEDULED)] == ['1', '2']

        with open(tmp_path / 'scheduled.yaml') as f:
            data = yaml.safe_load(f)
        assert list(data) == [SCHEDULED]

    def test_empty_file_is_empty(self, tmp_path):
        (tmp_path / 'users.yaml').write_text('')
        assert YamlStore(str(tmp_path)).load(USERS) == []

    def test_corrupt_file_is_empty(self, tmp_path):
        """Unparseable YAML reads as an empty collection."""
        (tmp_path / 'matches.yaml').write_text('matches: [unclosed\n  - : :')
        assert YamlStore(str(tmp_path)).load(MATCHES) == []

    def test_creates_data_dir(self, tmp_path):
        data_dir = tmp_path / 'nested' / 'data'
        YamlStore(str(data_dir))
        assert data_dir.is_dir()

    def test_results_survive_reopen(self, tmp_path):
        """A result written through one store is read by a fresh one."""
        match = MatchResult('Ana', 'Bea', [[6, 4], [6, 3]], division='Oro', tournament='T')
        ResultRepository(YamlStore(str(tmp_path))).add(match)
        reloaded = ResultRepository(YamlStore(str(tmp_path))).list('Oro', 'T')
        assert [m.id for m in reloaded] == [match.id]
        assert reloaded[0].player1_sets_won == 2

    def test_unicode_names(self, tmp_path):
        store = YamlStore(str(tmp_path))
        store.save(USERS, [{'name': 'Begoña'}])
        assert store.load(USERS) == [{'name': 'Begoña'}]
        assert 'Begoña' in (tmp_path / 'users.yaml').read_text(encoding='utf-8')


class TestTournamentCatalogue:
    """Tests for the tournament catalogue."""

    def test_defaults(self, tmp_path):
        catalogue = load_tournaments(str(tmp_path))
        assert catalogue == get_default_tournaments()
        assert catalogue['PPC Cup'] == ['Elite', 'Standard', 'Beginner']
        assert 'Oro' in catalogue['PPC Winter 2025/2026']

    def test_file_overrides_defaults(self, tmp_path):
        (tmp_path / TOURNAMENTS_FILENAME).write_text(yaml.dump({'Club Open': ['A', 'B']}))
        assert load_tournaments(str(tmp_path)) == {'Club Open': ['A', 'B']}

    def test_corrupt_file_falls_back(self, tmp_path):
        (tmp_path / TOURNAMENTS_FILENAME).write_text('{bad: [yaml')
        assert load_tournaments(str(tmp_path)) == get_default_tournaments()

    def test_all_divisions_unique(self):
        divisions = all_divisions(get_default_tournaments())
        assert divisions == ['Oro', 'Plata', 'Bronce', 'Cobre', 'Hierro',
                             'Elite', 'Standard', 'Beginner']
