"""Smoke test to verify the toolchain works."""


def test_import_mg4_dashboard():
    """Verify the mg4_dashboard package can be imported."""
    import mg4_dashboard

    assert mg4_dashboard is not None


def test_subpackages_importable():
    """Verify all subpackages can be imported."""
    import mg4_dashboard.routing
    import mg4_dashboard.session
    import mg4_dashboard.vehicle

    assert mg4_dashboard.routing is not None
    assert mg4_dashboard.session is not None
    assert mg4_dashboard.vehicle is not None
