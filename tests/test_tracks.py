from speedread.application.tracks import TrackRegistry


class _Logger:
    def __init__(self):
        self.debugs = []
        self.infos = []
        self.warnings = []

    def debug(self, message, *args):
        self.debugs.append(message % args if args else message)

    def info(self, message, *args):
        self.infos.append(message % args if args else message)

    def warning(self, message, *args):
        self.warnings.append(message % args if args else message)


def _registry():
    registry = TrackRegistry(_Logger())
    notifications = []
    registry.subscribe(lambda: notifications.append(registry.max_length))
    return registry, notifications


def test_registry_starts_with_one_empty_track():
    registry, _ = _registry()

    assert len(registry) == 1
    track = registry.tracks[0]
    assert track.display_name == "Track 1"
    assert track.tokens == ()
    assert track.fingerprint is None
    assert track.is_loaded is False
    assert registry.max_length == 0


def test_add_names_tracks_by_position_at_call_time():
    registry, notifications = _registry()

    second = registry.add()
    registry.remove(registry.tracks[0].id)
    third = registry.add()

    assert second.display_name == "Track 2"
    assert third.display_name == "Track 2"
    assert second.id != third.id
    assert len(notifications) == 3


def test_load_replaces_content_atomically_and_notifies():
    registry, notifications = _registry()
    track_id = registry.tracks[0].id

    registry.load(track_id, "book.txt", ["a", "b", "c"], "f00d")

    track = registry.get(track_id)
    assert track.tokens == ("a", "b", "c")
    assert track.fingerprint == "f00d"
    assert track.display_name == "book.txt"
    assert track.source_name == "book.txt"
    assert notifications == [3]


def test_load_with_no_tokens_clears_fingerprint():
    registry, _ = _registry()
    track_id = registry.tracks[0].id
    registry.load(track_id, "book.txt", ["a"], "f00d")

    registry.load(track_id, "empty.txt", [], "beef")

    track = registry.get(track_id)
    assert track.tokens == ()
    assert track.fingerprint is None
    assert track.is_loaded is False


def test_load_of_words_without_fingerprint_is_ignored():
    registry, notifications = _registry()
    track_id = registry.tracks[0].id
    registry.load(track_id, "book.txt", ["a", "b"], "f00d")

    registry.load(track_id, "other.txt", ["one", "two", "three"], None)

    track = registry.get(track_id)
    assert track.tokens == ("a", "b")
    assert track.fingerprint == "f00d"
    assert track.display_name == "book.txt"
    assert notifications == [2]
    assert "no fingerprint" in registry.logger.warnings[0]


def test_load_and_remove_unknown_ids_are_silent_no_ops():
    registry, notifications = _registry()

    registry.load(999, "x.txt", ["a"], "f")
    registry.remove(999)

    assert notifications == []
    assert len(registry) == 1
    assert registry.logger.debugs


def test_removing_only_track_leaves_a_fresh_empty_track():
    registry, notifications = _registry()
    original = registry.tracks[0]
    registry.load(original.id, "book.txt", ["a", "b"], "f00d")

    registry.remove(original.id)

    assert len(registry) == 1
    replacement = registry.tracks[0]
    assert replacement.id != original.id
    assert replacement.display_name == "Track 1"
    assert replacement.is_loaded is False
    assert notifications == [2, 0]


def test_max_length_tracks_longest_loaded_track():
    registry, _ = _registry()
    first = registry.tracks[0]
    second = registry.add()

    registry.load(first.id, "short", ["a", "b", "c"], "1")
    registry.load(second.id, "long", [str(n) for n in range(10)], "2")
    assert registry.max_length == 10

    registry.remove(second.id)
    assert registry.max_length == 3
    assert registry.any_loaded is True
