"""End-to-end scenarios for the derived responsive state bundle."""

import math

from responsive.design import Platform, Viewport, compute_state, round_to_nearest_pixel


def test_reference_phone_portrait():
    state = compute_state(Viewport(375, 812))
    assert state.is_portrait is True
    assert state.is_landscape is False
    assert state.orientation == "portrait"
    assert state.breakpoint_group == "group1"


def test_bundle_conversions():
    state = compute_state(Viewport(375, 812))
    assert state.wp(50) == round_to_nearest_pixel(187.5)
    assert state.vw(50) == 187
    assert state.hp("25%") == 203
    assert state.vh(25) == math.floor(812 / 100 * 25)
    assert state.rem(16) == 16
    assert state.rf(40) == 32


def test_tablet_breakpoint():
    assert compute_state(Viewport(700, 1000)).breakpoint_group == "group3"


def test_platform_flags():
    ios = compute_state(Viewport(390, 844, platform=Platform.IOS))
    assert ios.is_ios and not ios.is_android
    android = compute_state(Viewport(412, 915, platform=Platform.ANDROID))
    assert android.is_android and not android.is_ios
    other = compute_state(Viewport(1280, 800))
    assert not other.is_ios and not other.is_android


def test_square_viewport_has_no_orientation():
    state = compute_state(Viewport(800, 800))
    assert not state.is_landscape and not state.is_portrait
    assert state.orientation == "square"


def test_state_recomputed_per_snapshot():
    portrait = compute_state(Viewport(375, 812))
    landscape = compute_state(Viewport(812, 375))
    assert portrait.is_portrait and landscape.is_landscape
    assert portrait.breakpoint_group == "group1"
    assert landscape.breakpoint_group == "group4"
    assert compute_state(Viewport(375, 812)) == portrait


def test_nan_from_bundle():
    assert math.isnan(compute_state(Viewport(375, 812)).wp("wide"))


def test_platform_from_identifier():
    assert Platform.from_identifier("iOS") is Platform.IOS
    assert Platform.from_identifier("osx") is Platform.MACOS
    assert Platform.from_identifier("darwin") is Platform.MACOS
    assert Platform.from_identifier("ubuntu") is Platform.LINUX
    assert Platform.from_identifier("") is Platform.UNKNOWN
    assert Platform.from_identifier(None) is Platform.UNKNOWN
    assert Platform.from_identifier("beos") is Platform.UNKNOWN
