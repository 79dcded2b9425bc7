import pytest


@pytest.mark.unit
def test_package_exports() -> None:
    import zonevalue

    for name in zonevalue.__all__:
        assert hasattr(zonevalue, name), name


@pytest.mark.unit
def test_package_level_usage() -> None:
    from zonevalue import NameStyle, TimeZone, TimeZoneNotFoundError

    assert TimeZone.autoupdating_current() == TimeZone.autoupdating_current()
    assert TimeZone.current() != TimeZone.autoupdating_current()
    assert NameStyle.GENERIC.width == "long"
    with pytest.raises(TimeZoneNotFoundError):
        TimeZone("not-a-real-zone")
