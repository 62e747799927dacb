import pytest

from cub.errors import CubError
from cub.models import LockSnapshot, ResolutionResult
from cub.services.update_attempt import UpdateAttempt


class DummyLogger:
    def debug(self, *_args, **_kwargs):
        return None


class StubResolver:
    def __init__(self, result):
        self.result = result
        self.options = None

    def resolve(self, options):
        self.options = options
        return self.result


def _snapshot(version="1.2.0", reference="aaa"):
    return LockSnapshot("acme/widgets", version, reference)


def test_options_restrict_resolution_to_one_package():
    resolver = StubResolver(ResolutionResult(status=1))
    UpdateAttempt(resolver, DummyLogger(), prefer_stable=False).run("acme/widgets")

    options = resolver.options
    assert options.target_packages == frozenset(["acme/widgets"])
    assert options.prefer_stable is False
    assert options.prefer_lowest is False
    assert options.include_dev_dependencies is False
    assert options.run_scripts is False
    assert options.write_lock_on_success is True
    assert options.ignore_platform_constraints is True
    assert options.execute_install_operations is False


def test_changed_reference_is_reported_as_update():
    resolver = StubResolver(
        ResolutionResult(
            status=0,
            before={"acme/widgets": _snapshot("1.2.0", "aaa")},
            after={"acme/widgets": _snapshot("1.3.0", "bbb")},
        )
    )

    outcome = UpdateAttempt(resolver, DummyLogger()).run("acme/widgets")

    assert outcome.updated is True
    assert (outcome.old_display_version, outcome.new_display_version) == ("1.2.0", "1.3.0")


def test_non_success_status_is_unchanged_without_raising():
    resolver = StubResolver(ResolutionResult(status=2, before={"acme/widgets": _snapshot()}))

    outcome = UpdateAttempt(resolver, DummyLogger()).run("acme/widgets")

    assert outcome.updated is False
    assert outcome.resolved is False
    assert outcome.resolver_status == 2


@pytest.mark.parametrize(
    "before, after, message",
    [
        (None, _snapshot(), "current package version"),
        (_snapshot(version=None), _snapshot(), "current package version"),
        (_snapshot(), None, "new package version"),
        (_snapshot(), _snapshot(version=None), "new package version"),
    ],
)
def test_missing_version_field_raises(before, after, message):
    resolver = StubResolver(
        ResolutionResult(status=0, before={"acme/widgets": before}, after={"acme/widgets": after})
    )

    with pytest.raises(CubError, match=message):
        UpdateAttempt(resolver, DummyLogger()).run("acme/widgets")
