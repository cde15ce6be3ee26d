"""Test the appearance scheduler lifecycle, triggers and caller operations."""

import random

import pytest

from src.engine import (
    AppearanceScheduler,
    GridLayout,
    LifecycleState,
    TrackedWord,
    derive_level_parameters,
)


class ScriptedRandom(random.Random):
    """
    Random source with scripted float draws, so trigger rolls can be forced.

    ``values`` is a single float or a tuple of floats consumed in order;
    the last one repeats once the others are used up.
    """

    def __init__(self, values, seed: int = 0):
        self.values = list(values) if isinstance(values, tuple) else [values]
        super().__init__(seed)

    def random(self):
        if len(self.values) > 1:
            return self.values.pop(0)
        return self.values[0]

    # Keep integer draws (placement, shuffles) on the seeded generator
    def getrandbits(self, k):
        return super().getrandbits(k)


def _words(*texts, decoys=()):
    words = [TrackedWord(text=t, point_value=len(t) * 10) for t in texts]
    words += [TrackedWord(text=t, is_decoy=True) for t in decoys]
    return words


def _scheduler(words, level=1, value=0.0, layout=None):
    return AppearanceScheduler.create(
        words,
        layout or GridLayout(cols=40, rows=20),
        derive_level_parameters(level),
        rng=ScriptedRandom(value),
    )


class TestLifecycle:
    """Test Hidden -> Surfaced-Pending -> Clickable -> Hidden."""

    def test_surfaces_when_triggers_fire(self):
        """A forced trigger surfaces exactly one word at level 1."""
        scheduler = _scheduler(_words("CAT", "DOG", "SUN"))
        scheduler.advance(0)

        visible = scheduler.visible_words()
        assert len(visible) == 1
        word = visible[0]
        assert word.state == LifecycleState.SURFACED_PENDING
        assert word.origin is not None
        assert scheduler.layout.fits(word)

    def test_clickable_window(self):
        """Clickable from 200 ms after surfacing, for at most 3000 ms."""
        scheduler = _scheduler(_words("CAT"))
        scheduler.advance(0)
        word = scheduler.words[0]

        assert word.surfaced_at == 0
        assert word.clickable_from == 200
        assert word.clickable_until == 3200
        assert word.clickable_until - word.clickable_from <= 3000

    def test_pending_then_clickable(self):
        scheduler = _scheduler(_words("CAT"))
        scheduler.advance(0)
        word = scheduler.words[0]

        scheduler.advance(100)
        assert word.state == LifecycleState.SURFACED_PENDING
        assert not word.is_clickable(100)

        scheduler.advance(250)
        assert word.state == LifecycleState.CLICKABLE
        assert word.is_clickable(250)
        assert word.time_left(250) == 2950

    def test_hides_after_window(self):
        """Past the clickable window the word returns to Hidden."""
        scheduler = _scheduler(_words("CAT"))
        scheduler.advance(0)
        word = scheduler.words[0]

        scheduler.advance(3300)
        assert word.state == LifecycleState.HIDDEN
        assert word.surfaced_at is None
        assert word.clickable_until is None
        assert not word.is_clickable(3300)

    def test_hides_after_surface_duration(self):
        """At high levels the surface duration ends before the clickable window."""
        scheduler = _scheduler(_words("DRAGON"), level=31)
        scheduler.advance(0)
        word = scheduler.words[0]
        assert word.surface_duration == 1000
        assert word.clickable_until == 3200

        scheduler.advance(500)
        assert word.state == LifecycleState.CLICKABLE
        assert not word.is_clickable(1000)

        scheduler.advance(1000)
        assert word.state == LifecycleState.HIDDEN
        assert word.surfaced_at is None
        assert not word.is_clickable(1000)
        assert scheduler.resolve("DRAGON", 1000) is False

    def test_nothing_surfaces_when_rolls_fail(self):
        """Failed rolls schedule a retry instead of surfacing."""
        scheduler = _scheduler(_words("CAT"), value=0.99)
        scheduler.advance(0)

        assert scheduler.visible_count == 0
        assert scheduler.next_eligible["CAT"] >= 100
        assert scheduler.needs_forced_surface()

    def test_retry_gate_respected(self):
        """A word is not reconsidered before its retry time."""
        scheduler = _scheduler(_words("CAT"), value=0.99)
        scheduler.advance(0)
        retry_at = scheduler.next_eligible["CAT"]

        scheduler._rng.values = [0.0]
        scheduler.advance(retry_at - 1)
        assert scheduler.visible_count == 0

        scheduler.advance(retry_at)
        assert scheduler.visible_count == 1


class TestTriggers:
    """Test each surfacing trigger just under and just over its threshold."""

    def test_find_burst_fires(self):
        """Within 2 s of a find, a roll under 0.7 surfaces at level 1."""
        scheduler = _scheduler(_words("CAT"), value=(0.69, 0.99))
        scheduler.last_find_at = 0
        scheduler.advance(1000)
        assert scheduler.visible_count == 1

    def test_find_burst_misses(self):
        """A burst roll over 0.7 falls through; the later rolls miss too."""
        scheduler = _scheduler(_words("CAT"), value=(0.71, 0.99))
        scheduler.last_find_at = 0
        scheduler.advance(1000)
        assert scheduler.visible_count == 0

    def test_zero_visible_base_chance(self):
        """With no gap the zero-visible chance is 0.85 at level 1."""
        fires = _scheduler(_words("CAT"), value=(0.84, 0.99))
        fires.advance(0)
        assert fires.visible_count == 1

        misses = _scheduler(_words("CAT"), value=(0.87, 0.99))
        misses.advance(0)
        assert misses.visible_count == 0

    def test_zero_visible_grows_with_gap(self):
        """One second with nothing visible adds 5% to the chance."""
        scheduler = _scheduler(_words("CAT"), value=(0.87, 0.99))
        scheduler.last_visible_at = 0
        scheduler.advance(1000)
        assert scheduler.visible_count == 1

    @pytest.mark.parametrize("roll,surfaces", [(0.94, True), (0.96, False)])
    def test_zero_visible_capped(self, roll, surfaces):
        """A long gap caps the zero-visible chance at 0.95."""
        scheduler = _scheduler(_words("CAT"), value=(roll, 0.99))
        scheduler.last_visible_at = 0
        scheduler.advance(60000)
        assert (scheduler.visible_count == 1) is surfaces

    @pytest.mark.parametrize("roll,expected", [(0.39, 2), (0.41, 1)])
    def test_second_slot(self, roll, expected):
        """With one word up and a cap of two, a roll under 0.4 adds a second."""
        scheduler = _scheduler(_words("PIXEL", "ROBOT"), level=11, value=0.99)
        assert scheduler.force_surface_one(0) is True

        scheduler._rng.values = [roll, 0.99]
        scheduler.advance(100)
        assert scheduler.visible_count == expected

    @pytest.mark.parametrize("roll,expected", [(0.09, 2), (0.11, 1)])
    def test_ambient_with_one_visible(self, roll, expected):
        """After the second-slot roll misses, the 10% ambient roll still can fire."""
        scheduler = _scheduler(_words("PIXEL", "ROBOT"), level=11, value=0.99)
        scheduler.force_surface_one(0)

        scheduler._rng.values = [0.41, roll]
        scheduler.advance(100)
        assert scheduler.visible_count == expected

    @pytest.mark.parametrize("roll,expected", [(0.11, 1), (0.13, 0)])
    def test_ambient_when_idle(self, roll, expected):
        """At level 1 the ambient chance is 12% once zero-visible misses."""
        scheduler = _scheduler(_words("CAT"), value=(0.99, roll))
        scheduler.advance(0)
        assert scheduler.visible_count == expected


class TestConcurrencyAndCooldown:
    """Test the visible-word cap and per-text cooldown."""

    def test_cap_of_one_early(self):
        scheduler = _scheduler(_words("CAT", "DOG", "SUN", "OWL"))
        for now in range(0, 10000, 100):
            scheduler.advance(now)
            assert scheduler.visible_count <= 1

    def test_cap_of_two_after_level_ten(self):
        scheduler = _scheduler(_words("PIXEL", "ROBOT", "CLOUD", "STACK", "QUEUE"), level=11)
        scheduler.advance(0)
        assert scheduler.visible_count == 2

        for now in range(100, 10000, 100):
            scheduler.advance(now)
            assert scheduler.visible_count <= 2

    def test_surfaced_words_do_not_overlap(self):
        scheduler = _scheduler(_words("PIXEL", "ROBOT", "CLOUD", "STACK"), level=11)
        scheduler.advance(0)

        first, second = scheduler.visible_words()
        assert not set(first.cells()) & set(second.cells())

    def test_cooldown_blocks_resurfacing(self):
        """A text cannot resurface until its cooldown has passed."""
        scheduler = _scheduler(_words("CAT"))
        word = scheduler.words[0]
        scheduler.advance(0)
        scheduler.advance(3300)
        assert word.state == LifecycleState.HIDDEN

        for now in (5000, 10000, 14999):
            scheduler.advance(now)
            assert word.state == LifecycleState.HIDDEN

        scheduler.advance(15000)
        assert word.is_visible


class TestResolve:
    """Test marking words found."""

    def test_valid_find(self):
        scheduler = _scheduler(_words("CAT"))
        scheduler.advance(0)

        assert scheduler.resolve("CAT", 500) is True
        word = scheduler.words[0]
        assert word.found
        assert word.found_at == 500
        assert scheduler.last_find_at == 500
        assert word not in scheduler.visible_words()

    def test_no_double_find(self):
        """A found word cannot be found again."""
        scheduler = _scheduler(_words("CAT"))
        scheduler.advance(0)

        assert scheduler.resolve("CAT", 500) is True
        assert scheduler.resolve("CAT", 600) is False

    def test_settle_delay(self):
        """Clicks before the settle delay do not count."""
        scheduler = _scheduler(_words("CAT"))
        scheduler.advance(0)
        assert scheduler.resolve("CAT", 100) is False
        assert not scheduler.words[0].found

    def test_hidden_word(self):
        scheduler = _scheduler(_words("CAT"), value=0.99)
        scheduler.advance(0)
        assert scheduler.resolve("CAT", 500) is False

    def test_decoy_never_found(self):
        scheduler = _scheduler(_words(decoys=("CAZ",)))
        scheduler.advance(0)
        decoy = scheduler.words[0]
        assert decoy.is_visible

        assert scheduler.resolve("CAZ", 500) is False
        assert not decoy.found

    def test_unknown_text(self):
        scheduler = _scheduler(_words("CAT"))
        scheduler.advance(0)
        assert scheduler.resolve("NOPE", 500) is False

    def test_found_words_never_resurface(self):
        scheduler = _scheduler(_words("CAT", "DOG"))
        scheduler.advance(0)
        text = scheduler.visible_words()[0].text
        scheduler.resolve(text, 500)

        for now in range(600, 40000, 100):
            scheduler.advance(now)
            assert text not in [w.text for w in scheduler.visible_words()]

    def test_all_real_found(self):
        scheduler = _scheduler(_words("CAT", decoys=("CAZ",)))
        assert not scheduler.all_real_found
        scheduler.advance(0)
        scheduler.resolve("CAT", 500)
        assert scheduler.all_real_found


class TestForcedSurface:
    """Test the forced-appearance escape hatch."""

    def test_forces_a_word_up(self):
        scheduler = _scheduler(_words("CAT", "DOG"), value=0.99)
        scheduler.advance(0)
        assert scheduler.visible_count == 0

        assert scheduler.force_surface_one(0) is True
        assert scheduler.visible_count == 1
        assert scheduler.layout.fits(scheduler.visible_words()[0])

    def test_respects_cap(self):
        scheduler = _scheduler(_words("CAT", "DOG"))
        scheduler.advance(0)
        assert scheduler.force_surface_one(0) is False
        assert scheduler.visible_count == 1

    def test_prefers_real_words(self):
        scheduler = _scheduler(_words("CAT", decoys=("CAZ", "DAT", "CAP")), value=0.99)
        assert scheduler.force_surface_one(0) is True
        assert scheduler.visible_words()[0].text == "CAT"

    def test_degenerate_layout(self):
        scheduler = _scheduler(_words("CAT"), layout=GridLayout())
        assert scheduler.force_surface_one(0) is False

    def test_safe_cell_fallback(self):
        """When every placement overlaps, the fixed safe cell is used."""
        layout = GridLayout(cols=3, rows=1)
        scheduler = _scheduler(_words("CAT", "DOG"), level=11, value=0.99, layout=layout)

        assert scheduler.force_surface_one(0) is True
        assert scheduler.force_surface_one(0) is True
        assert scheduler.visible_count == 2
        assert all(tuple(w.origin) == (0, 0) for w in scheduler.visible_words())


class TestResync:
    """Test adopting a new layout."""

    def test_out_of_band_words_hidden(self):
        scheduler = _scheduler(_words("CAT"))
        scheduler.advance(0)
        word = scheduler.words[0]

        scheduler.resync_layout(GridLayout(cols=2, rows=2))
        assert word.state == LifecycleState.HIDDEN
        assert word.origin is None

    def test_words_that_still_fit_stay(self):
        scheduler = _scheduler(_words("CAT"))
        scheduler.advance(0)
        word = scheduler.words[0]
        origin = word.origin

        scheduler.resync_layout(GridLayout(cols=80, rows=40))
        assert word.is_visible
        assert word.origin == origin

    def test_empty_canvas_ignored(self):
        scheduler = _scheduler(_words("CAT"))
        layout = scheduler.layout
        scheduler.resync_dimensions(0, 0, 12, 24)
        assert scheduler.layout is layout

    def test_resync_dimensions(self):
        scheduler = _scheduler(_words("CAT"))
        scheduler.resync_dimensions(480, 240, 12, 24)
        assert scheduler.layout.cols == 40
        assert scheduler.layout.rows == 10


class TestPacing:
    """Test retry delays and the combo speed-up."""

    def test_speed_multiplier_floor(self):
        scheduler = _scheduler(_words("CAT"))
        scheduler.set_speed_multiplier(0.5)
        assert scheduler.speed_multiplier == 1.0

    def test_retry_delay_minimum(self):
        scheduler = _scheduler(_words("CAT"))
        scheduler.set_speed_multiplier(100)
        assert scheduler.retry_delay("one_visible") == 100

    def test_retry_delay_by_situation(self):
        """Right after a find retries come fastest."""
        scheduler = _scheduler(_words("CAT"), value=0.5)
        assert scheduler.retry_delay("burst") < scheduler.retry_delay("idle") < scheduler.retry_delay("one_visible")

    def test_get_state(self):
        scheduler = _scheduler(_words("CAT"))
        scheduler.advance(0)
        state = scheduler.get_state()
        assert state["visible"] == ["CAT"]
        assert state["max_visible"] == 1
        assert "CAT" in state["cooldowns"]


class TestScriptedRandom:
    """Sanity checks for the test helper."""

    @pytest.mark.parametrize("value", [0.0, 0.5, 0.99])
    def test_integer_draws_still_vary(self, value):
        rng = ScriptedRandom(value)
        assert len({rng.randint(0, 1000) for _ in range(20)}) > 1
