"""Smoke test to verify the toolchain works."""


def test_import_drft():
    """Verify the drft package can be imported."""
    import drft

    assert drft is not None


def test_subpackages_importable():
    """Verify all subpackages can be imported."""
    import drft.currents
    import drft.overlay.renderer
    import drft.playback.controller
    import drft.track

    assert drft.track is not None
    assert drft.currents is not None
    assert drft.playback.controller is not None
    assert drft.overlay.renderer is not None
