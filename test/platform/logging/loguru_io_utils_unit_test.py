import pytest

from src.platform.logging.loguru_io import Logger
from src.platform.logging.loguru_io_config import MASK, MAX_CONTENT_LENGTH
from src.platform.logging.loguru_io_utils import (
    mask_sensitive,
    normalize_args_kwargs,
    should_mask_keyword,
    truncate_content,
)
from src.service.concert_booking.domain.entity.user_entity import User


@pytest.mark.unit
class TestMaskSensitive:
    def test_masks_quoted_values_in_reprs(self) -> None:
        masked = mask_sensitive("{'username': 'user', 'password': 'hunter2', 'salt': 'abc'}")

        assert 'hunter2' not in masked
        assert 'abc' not in masked
        assert f"'password': '{MASK}'" in masked
        assert "'username': 'user'" in masked

    def test_masks_keyword_style_assignments(self) -> None:
        masked = mask_sensitive("User(username='user', password_hash='deadbeef')")

        assert 'deadbeef' not in masked
        assert f"password_hash='{MASK}'" in masked

    def test_leaves_other_values_untouched(self) -> None:
        data = {'concert_id': 'c-1'}

        assert mask_sensitive(data) is data
        assert mask_sensitive(42) == 42
        assert mask_sensitive(None) is None

    def test_should_mask_keyword(self) -> None:
        assert should_mask_keyword('password', 'secret') == MASK
        assert should_mask_keyword('username', 'user') == 'user'


@pytest.mark.unit
class TestTruncateContent:
    def test_long_strings_are_truncated_with_suffix(self) -> None:
        text = 'x' * (MAX_CONTENT_LENGTH + 25)

        truncated = truncate_content(text)

        assert truncated.startswith('x' * MAX_CONTENT_LENGTH)
        assert truncated.endswith('...(+25 chars)')

    def test_short_strings_and_other_types_pass_through(self) -> None:
        assert truncate_content('short') == 'short'
        assert truncate_content([1, 2]) == [1, 2]


@pytest.mark.unit
class TestNormalizeArgsKwargs:
    def test_drops_unknown_keyword_arguments(self) -> None:
        def handler(concert_id: str, *, user_id: str) -> None:
            pass

        args, kwargs = normalize_args_kwargs(handler, 'c-1', user_id='u-1', trace_id='t-1')

        assert args == ('c-1',)
        assert kwargs == {'user_id': 'u-1'}

    def test_keeps_everything_when_function_takes_var_kwargs(self) -> None:
        def handler(**kwargs: str) -> None:
            pass

        _, kwargs = normalize_args_kwargs(handler, trace_id='t-1')

        assert kwargs == {'trace_id': 't-1'}


@pytest.mark.unit
class TestLoggerIo:
    def test_sync_function_result_is_returned(self) -> None:
        @Logger.io
        def add(a: int, b: int) -> int:
            return a + b

        assert add(1, 2) == 3

    async def test_async_function_errors_are_reraised_and_flagged(self) -> None:
        @Logger.io
        async def fail() -> None:
            raise ValueError('boom')

        with pytest.raises(ValueError, match='boom') as exc_info:
            await fail()

        assert getattr(exc_info.value, '_has_logged', False) is True

    def test_reraise_false_swallows_and_returns_none(self) -> None:
        @Logger.io(reraise=False)
        def fail() -> int:
            raise ValueError('boom')

        assert fail() is None

    def test_user_credentials_are_masked_in_repr_based_logs(self) -> None:
        user = User.create(username='user', password_hash='deadbeef', salt='pepper')

        assert 'deadbeef' not in mask_sensitive(repr(user))
