"""
Tests for player and round persistence.
"""

import json
from datetime import date

import pytest

from bagtag.core.models import Participant, Player, Round
from bagtag.storage import (
    BagtagStorage,
    InMemoryStore,
    JsonFileStore,
    StorageError,
    initialize_data,
    seed_data,
)


@pytest.fixture
def players():
    return [
        Player("p1", "Lars", 1, date(2025, 1, 1)),
        Player("p2", "Thacker", 2, date(2025, 1, 5)),
    ]


@pytest.fixture
def rounds():
    return [
        Round("r1", date(2025, 1, 15), (
            Participant("p2", "Thacker", 2, 2, score=52, new_bagtag=1),
            Participant("p1", "Lars", 1, 1, score=55, new_bagtag=2),
        )),
    ]


class FailingStore(InMemoryStore):
    def set_string(self, key, value):
        raise OSError("disk full")


class TestBagtagStorage:
    """Tests for BagtagStorage over the in-memory store."""

    def test_empty_store_returns_empty_lists(self):
        storage = BagtagStorage(InMemoryStore())
        assert storage.get_players() == []
        assert storage.get_rounds() == []

    def test_players_round_trip(self, players):
        storage = BagtagStorage(InMemoryStore())
        storage.save_players(players)
        assert storage.get_players() == players

    def test_rounds_round_trip(self, rounds):
        storage = BagtagStorage(InMemoryStore())
        storage.save_rounds(rounds)
        assert storage.get_rounds() == rounds

    def test_serialized_format(self, players, rounds):
        store = InMemoryStore()
        storage = BagtagStorage(store)
        storage.save_players(players)
        storage.save_rounds(rounds)

        stored_players = json.loads(store.get_string("players"))
        assert stored_players[0] == {"id": "p1", "name": "Lars", "currentBagtag": 1, "joinDate": "2025-01-01"}

        stored_rounds = json.loads(store.get_string("rounds"))
        assert stored_rounds[0]["date"] == "2025-01-15"
        assert stored_rounds[0]["participants"][0] == {
            "playerId": "p2",
            "playerName": "Thacker",
            "currentBagtag": 2,
            "oldBagtag": 2,
            "score": 52,
            "newBagtag": 1,
        }

    def test_participant_without_current_bagtag(self):
        store = InMemoryStore({"rounds": json.dumps([{
            "id": "1",
            "date": "2025-01-15",
            "participants": [{"playerId": "1", "playerName": "Lars", "score": 55, "oldBagtag": 1, "newBagtag": 2}],
        }])})
        [round_] = BagtagStorage(store).get_rounds()
        assert round_.participants[0].current_bagtag == 1

    @pytest.mark.parametrize("raw", [
        "not json",
        '{"unexpected": "shape"}',
        '[{"id": "1", "name": "Lars"}]',
        '[{"id": "1", "name": "Lars", "currentBagtag": 1, "joinDate": "15/01/2025"}]',
    ])
    def test_corrupt_players_degrade_to_empty(self, raw, caplog):
        storage = BagtagStorage(InMemoryStore({"players": raw}))
        assert storage.get_players() == []
        assert "Error loading players" in caplog.text

    def test_corrupt_rounds_degrade_to_empty(self):
        storage = BagtagStorage(InMemoryStore({"rounds": "[{"}))
        assert storage.get_rounds() == []

    def test_failed_write_raises(self, players):
        storage = BagtagStorage(FailingStore())
        with pytest.raises(StorageError):
            storage.save_players(players)

    def test_clear_all(self, players, rounds):
        storage = BagtagStorage(InMemoryStore())
        storage.save_players(players)
        storage.save_rounds(rounds)
        storage.clear_all()
        assert storage.get_players() == []
        assert storage.get_rounds() == []


class TestJsonFileStore:
    """Tests for the file-backed store."""

    def test_missing_key_returns_none(self, tmp_path):
        assert JsonFileStore(tmp_path).get_string("players") is None

    def test_writes_one_file_per_key(self, tmp_path, players, rounds):
        storage = BagtagStorage(JsonFileStore(tmp_path))
        storage.save_players(players)
        storage.save_rounds(rounds)

        assert sorted(f.name for f in tmp_path.iterdir()) == ["players.json", "rounds.json"]
        assert BagtagStorage(JsonFileStore(tmp_path)).get_players() == players

    def test_creates_folder(self, tmp_path):
        store = JsonFileStore(tmp_path / "nested" / "data")
        store.set_string("players", "[]")
        assert store.get_string("players") == "[]"

    def test_non_ascii_names(self, tmp_path):
        storage = BagtagStorage(JsonFileStore(tmp_path))
        storage.save_players([Player("p1", "Søren Ærø", 1, date(2025, 1, 1))])
        assert storage.get_players()[0].name == "Søren Ærø"

    def test_rejects_path_like_keys(self, tmp_path):
        with pytest.raises(ValueError):
            JsonFileStore(tmp_path).get_string("../players")

    def test_clear_all(self, tmp_path):
        store = JsonFileStore(tmp_path)
        store.set_string("players", "[]")
        store.clear_all()
        assert store.get_string("players") is None

    def test_clear_all_missing_folder(self, tmp_path):
        JsonFileStore(tmp_path / "missing").clear_all()


class TestSeedData:
    """Tests for the demo data."""

    def test_seed_roster_is_dense(self):
        players, _ = seed_data()
        assert sorted(p.current_bagtag for p in players) == list(range(1, len(players) + 1))

    def test_seed_round_matches_roster(self):
        players, [round_] = seed_data()
        bagtags = {p.id: p.current_bagtag for p in players}
        assert round_.date == date(2025, 1, 15)
        for participant in round_.participants:
            assert bagtags[participant.player_id] == participant.new_bagtag

    def test_seed_round_outcome(self):
        _, [round_] = seed_data()
        assert [(p.player_name, p.new_bagtag) for p in round_.participants] == [
            ("Thacker", 1),
            ("Lars", 2),
            ("Morten", 3),
        ]

    def test_initialize_empty_storage(self):
        storage = BagtagStorage(InMemoryStore())
        assert initialize_data(storage) is True
        assert len(storage.get_players()) == 5
        assert len(storage.get_rounds()) == 1

    def test_initialize_keeps_existing_players(self, players):
        storage = BagtagStorage(InMemoryStore())
        storage.save_players(players)
        assert initialize_data(storage) is False
        assert storage.get_players() == players
        assert storage.get_rounds() == []


class TestUnreadableBackup:
    """Tests that an unreadable blob survives being overwritten."""

    def test_corrupt_rounds_kept_before_overwrite(self, rounds, caplog):
        store = InMemoryStore({"rounds": "[{broken"})
        storage = BagtagStorage(store)

        assert storage.get_rounds() == []
        storage.save_rounds(rounds)

        assert store.get_string("rounds_backup") == "[{broken"
        assert storage.get_rounds() == rounds
        assert "previous contents kept under 'rounds_backup'" in caplog.text

    def test_backup_written_once(self, rounds):
        store = InMemoryStore({"rounds": "[{broken"})
        storage = BagtagStorage(store)
        storage.get_rounds()
        storage.save_rounds(rounds)
        store.set_string("rounds_backup", "kept")

        storage.save_rounds(rounds)
        assert store.get_string("rounds_backup") == "kept"

    def test_no_backup_for_readable_data(self, players):
        store = InMemoryStore()
        storage = BagtagStorage(store)
        storage.save_players(players)
        storage.get_players()
        storage.save_players(players)
        assert store.get_string("players_backup") is None

    def test_file_store_backup(self, tmp_path, players):
        (tmp_path / "players.json").write_text("not json", encoding="utf-8")
        storage = BagtagStorage(JsonFileStore(tmp_path))

        storage.get_players()
        storage.save_players(players)

        assert (tmp_path / "players_backup.json").read_text(encoding="utf-8") == "not json"
        assert storage.get_players() == players
