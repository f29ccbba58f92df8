"""
Tests for turning map clicks into panel selections.
"""

import pytest

from components.panel.controller import FlowPanelController, SelectionState
from components.panel.panel_page import apply_map_click, clear_selection, map_widget_key

pytestmark = pytest.mark.unit


class TestMapClicks:
    """Test cases for click handling across reruns."""

    def setup_method(self):
        """Set up test fixtures."""
        self.session_state = {}

    @pytest.fixture
    def controller(self, sample_rows, sample_features):
        controller = FlowPanelController(sample_features)
        controller.load_rows(sample_rows)
        return controller

    def test_click_selects_zone(self, controller):
        """Test that a new click selects the zone."""
        assert apply_map_click(controller, self.session_state, 'Store A')
        assert controller.selected == 'Store A'

    def test_repeated_click_report_is_ignored(self, controller):
        """Test that the same click reported on a rerun changes nothing."""
        apply_map_click(controller, self.session_state, 'Store A')

        assert not apply_map_click(controller, self.session_state, 'Store A')
        assert controller.selected == 'Store A'

    def test_reselect_after_clear(self, controller):
        """Test that the cleared zone can be selected again."""
        apply_map_click(controller, self.session_state, 'Store A')
        clear_selection(controller, self.session_state)

        assert controller.state is SelectionState.NO_SELECTION
        assert apply_map_click(controller, self.session_state, 'Store A')
        assert controller.selected == 'Store A'
        assert set(controller.overlay.names()) == {'Store B', 'Store D'}

    def test_clear_starts_new_map_widget(self, controller):
        """Test that clearing gives the map a fresh widget key."""
        before = map_widget_key(self.session_state)
        clear_selection(controller, self.session_state)

        assert map_widget_key(self.session_state) != before

    def test_reselect_after_new_dataset(self, controller, sample_rows):
        """Test that a zone can be selected again once new rows are loaded."""
        apply_map_click(controller, self.session_state, 'Store A')
        controller.load_rows(sample_rows)
        clear_selection(controller, self.session_state)

        assert apply_map_click(controller, self.session_state, 'Store A')
