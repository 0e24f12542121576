from api.activities.activities_model import Activity
from api.states import states_service as states_service_module
from api.states.states_model import VisitedState
from api.states.states_service import get_visited_state_codes, toggle_state_visited

USER = "user_3"


class TestToggleStateVisited:

    def test_toggle_updates_existing_row(self, db_session):
        toggle_state_visited(db_session, "ca", USER, True)
        row = toggle_state_visited(db_session, "CA", USER, False)

        assert row.visited is False
        assert db_session.query(VisitedState).filter_by(user_id=USER).count() == 1
        assert get_visited_state_codes(db_session, USER) == set()

    def test_concurrent_first_toggle_keeps_single_row(self, session_factory, db_session, monkeypatch):
        first, second = session_factory(), session_factory()
        try:
            toggle_state_visited(first, "CA", USER, True)

            # the second toggle looked for the row before the first committed
            real_lookup = states_service_module._find_visited_state
            lookups = []

            def stale_lookup(db, user_id, state_id):
                lookups.append(state_id)
                return None if len(lookups) == 1 else real_lookup(db, user_id, state_id)

            monkeypatch.setattr(states_service_module, "_find_visited_state", stale_lookup)
            row = toggle_state_visited(second, "CA", USER, False)

            assert row.visited is False
            assert second.query(VisitedState).filter_by(user_id=USER, state_id="CA").count() == 1
            assert second.query(Activity).filter_by(user_id=USER, state_id="CA").count() == 2
            assert get_visited_state_codes(second, USER) == set()
        finally:
            first.close()
            second.close()
