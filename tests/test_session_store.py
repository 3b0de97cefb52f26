import json

from models import ConnectionConfig, UserSession
from services.session_store import CONFIG_KEY, USER_KEY, SessionStore


def test_config_defaults_when_nothing_saved():
    defaults = ConnectionConfig(app_id='env-id', app_token='env-token')
    assert SessionStore({}).load_config(defaults) == defaults


def test_saved_config_overrides_defaults_key_by_key():
    storage = {CONFIG_KEY: json.dumps({"app_id": "user-id", "unknown": "x"})}
    defaults = ConnectionConfig(app_id='env-id', app_token='env-token')

    config = SessionStore(storage).load_config(defaults)

    assert config.app_id == 'user-id'
    assert config.app_token == 'env-token'


def test_save_config_round_trip():
    storage = {}
    store = SessionStore(storage)
    store.save_config(ConnectionConfig(app_id='a', app_secret='s'))

    assert json.loads(storage[CONFIG_KEY])["app_secret"] == 's'
    assert store.load_config(ConnectionConfig()).app_id == 'a'


def test_user_lifecycle():
    store = SessionStore({})
    assert store.load_user() is None

    store.save_user(UserSession(name='Somchai', open_id='ou_1'))
    assert store.load_user() == UserSession(name='Somchai', avatar_url='', open_id='ou_1')

    store.logout()
    assert store.load_user() is None


def test_logout_keeps_config():
    store = SessionStore({})
    store.save_config(ConnectionConfig(app_id='a'))
    store.save_user(UserSession(name='x'))

    store.logout()

    assert store.load_config(ConnectionConfig()).app_id == 'a'


def test_corrupt_entry_is_discarded():
    storage = {USER_KEY: '{not json', CONFIG_KEY: '[1, 2]'}
    store = SessionStore(storage)

    assert store.load_user() is None
    assert USER_KEY not in storage
    assert store.load_config(ConnectionConfig(app_id='d')).app_id == 'd'


def test_oauth_state_single_use():
    store = SessionStore({})
    state = store.issue_oauth_state()

    assert store.pop_oauth_state() == state
    assert store.pop_oauth_state() is None


def test_clear():
    storage = {"other": 1}
    store = SessionStore(storage)
    store.save_user(UserSession())
    store.save_config(ConnectionConfig())
    store.issue_oauth_state()

    store.clear()

    assert storage == {"other": 1}
