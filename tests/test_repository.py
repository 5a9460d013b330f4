from countgame.models import Result, Session, Settings
from countgame.observable import Observable


def test_observable_delivers_current_then_updates():
    observable = Observable(1)
    seen = []
    subscription = observable.subscribe(seen.append)
    observable.publish(2)
    subscription.unsubscribe()
    observable.publish(3)
    assert seen == [1, 2]
    assert observable.value == 3


def test_unsubscribe_twice_is_harmless():
    observable = Observable("a")
    subscription = observable.subscribe(lambda value: None)
    subscription.unsubscribe()
    subscription.unsubscribe()


def test_session_slot(repository):
    assert repository.load_session() is None
    session = Session(stage=3)
    repository.save_session(session)
    assert repository.load_session() is session
    repository.clear_session()
    assert repository.load_session() is None


def test_statistics_round_trip(repository):
    seen = []
    repository.observe_statistics(seen.append)
    repository.update_statistics(Result(
        stage=2, target_type=None, correct_answer=7, user_answer=7,
        is_correct=True, time_spent=4, total_items=7, count_all=True,
    ))
    assert repository.get_statistics().total_games == 1
    assert repository.get_high_score() == 160
    repository.update_high_score(500)
    assert repository.get_high_score() == 500
    repository.clear_statistics()
    assert repository.get_statistics().total_games == 0
    assert [s.total_games for s in seen] == [0, 1, 1, 0]


def test_settings_are_passed_through(repository):
    seen = []
    repository.observe_settings(seen.append)
    repository.update_settings(Settings(sound_enabled=False, language="en"))
    assert repository.get_settings().language == "en"
    assert seen[-1].sound_enabled is False


def test_credits_through_repository(repository):
    seen = []
    repository.observe_credits(seen.append)
    assert repository.consume_credit() is True
    assert repository.get_credits().current == 9
    assert repository.grant_daily_credits().current == 10
    assert [c.current for c in seen] == [10, 9, 10]
