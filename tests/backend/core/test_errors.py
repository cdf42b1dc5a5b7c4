import pytest

from backend.core import config
from backend.core.errors import (
    Conflict,
    Forbidden,
    Internal,
    NotFound,
    Unauthenticated,
    ValidationFailed,
    describe_validation_errors,
)


@pytest.mark.parametrize(
    ('error_class', 'status_code'),
    [
        (Unauthenticated, 401),
        (Forbidden, 403),
        (ValidationFailed, 400),
        (NotFound, 404),
        (Conflict, 409),
        (Internal, 500),
    ],
)
def test_error_classes_carry_http_status(error_class, status_code: int) -> None:
    assert error_class().status_code == status_code


def test_error_message_defaults_per_class() -> None:
    assert Internal().message == 'Internal server error'
    assert NotFound('Team not found').message == 'Team not found'


def test_describe_validation_errors_lists_missing_fields() -> None:
    errors = [
        {'type': 'missing', 'loc': ('body', 'title')},
        {'type': 'string_too_short', 'loc': ('body', 'sport')},
        {'type': 'missing', 'loc': ('body', 'title')},
    ]

    assert describe_validation_errors(errors) == 'Missing required fields: title, sport'


def test_describe_validation_errors_separates_malformed_fields() -> None:
    errors = [
        {'type': 'missing', 'loc': ('query', 'id')},
        {'type': 'datetime_from_date_parsing', 'loc': ('body', 'date')},
    ]

    assert describe_validation_errors(errors) == 'Missing required fields: id; Invalid fields: date'


def test_describe_validation_errors_names_body_when_it_is_absent() -> None:
    assert describe_validation_errors([{'type': 'missing', 'loc': ('body',)}]) == 'Missing required fields: body'


def test_describe_validation_errors_reports_undecodable_json() -> None:
    errors = [{'type': 'json_invalid', 'loc': ('body', 1), 'msg': 'JSON decode error'}]

    assert describe_validation_errors(errors) == 'Malformed JSON body'


@pytest.mark.parametrize(
    ('value', 'expected'),
    [(None, False), ('1', True), (' Yes ', True), ('off', False)],
)
def test_get_bool_parses_flags(value, expected: bool) -> None:
    assert config._get_bool(value) is expected


def test_get_list_splits_comma_separated_values() -> None:
    assert config._get_list('http://a, http://b,', []) == ['http://a', 'http://b']
    assert config._get_list(None, ['http://default']) == ['http://default']


def test_validate_runtime_config_refuses_default_secret_in_production(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, 'APP_ENV', 'production')
    monkeypatch.setattr(config, 'JWT_SECRET_KEY', 'change-me')

    with pytest.raises(RuntimeError):
        config.validate_runtime_config()
