"""Unit tests for constants."""

from memoqueue.constants import Defaults, EnvVars
from memoqueue.domain.entities.eviction_policy import PolicyName
from memoqueue.domain.entities.queue_entry import SortKey


class TestDefaults:
    def test_defaults_are_valid_choices(self):
        assert Defaults.EVICTION_POLICY in {p.value for p in PolicyName}
        assert Defaults.QUEUE_SORT in {k.value for k in SortKey}


class TestEnvVars:
    def test_all_names_are_prefixed(self):
        assert all(name.startswith("MEMOQUEUE_") for name in EnvVars.ALL)

    def test_all_is_complete(self):
        assert len(set(EnvVars.ALL)) == 5
