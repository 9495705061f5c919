import re
from pathlib import Path
from unittest.mock import call

import pytest

from selenese_tools.config.types import SeleniumSettings
from selenese_tools.exceptions import MissingCommandError, WaitTimedOutError
from selenese_tools.wrapper import SeleniumWrapper

DEFAULT_TIMEOUT = 10000


class TestTimeouts:
    def test_get_and_set_timeout(self, wrapper, mock_selenium):
        assert wrapper.timeout is None
        wrapper.timeout = "5000"
        mock_selenium.set_timeout.assert_called_once_with("5000")
        assert wrapper.timeout == "5000"

    def test_set_timeout_method(self, wrapper, mock_selenium):
        wrapper.set_timeout(2000)
        mock_selenium.set_timeout.assert_called_once_with(2000)
        assert wrapper.get_timeout() == 2000

    def test_default_timeout_comes_from_config(self, wrapper):
        assert wrapper.default_timeout == DEFAULT_TIMEOUT

    def test_wait_for_page_to_load_uses_default_timeout(self, wrapper, mock_selenium):
        wrapper.wait_for_page_to_load()
        mock_selenium.wait_for_page_to_load.assert_called_once_with(DEFAULT_TIMEOUT)

    def test_wait_for_page_to_load_uses_timeout_when_set(self, wrapper, mock_selenium):
        wrapper.timeout = "5000"
        wrapper.wait_for_page_to_load()
        mock_selenium.wait_for_page_to_load.assert_called_once_with("5000")

    def test_wait_for_page_to_load_with_explicit_timeout(self, wrapper, mock_selenium):
        wrapper.wait_for_page_to_load(1234)
        mock_selenium.wait_for_page_to_load.assert_called_once_with(1234)


def test_alive_reflects_start_and_stop(wrapper, mock_selenium):
    assert wrapper.alive is False
    wrapper.start()
    assert wrapper.alive is True
    wrapper.stop()
    assert wrapper.alive is False
    assert mock_selenium.mock_calls == [call.start(), call.stop()]


class TestContextPath:
    def test_context_path_from_config(self, mock_selenium):
        wrapper = SeleniumWrapper(mock_selenium, None, SeleniumSettings(context_path="/foo"))
        assert wrapper.context_path == "/foo"

    def test_context_path_gets_leading_slash(self, mock_selenium):
        wrapper = SeleniumWrapper(mock_selenium, None, SeleniumSettings(context_path="foo"))
        assert wrapper.context_path == "/foo"

    def test_context_path_from_app_name(self, mock_selenium):
        wrapper = SeleniumWrapper(mock_selenium, None, SeleniumSettings(app_name="shop"))
        assert wrapper.context_path == "/shop"

    def test_context_path_defaults_to_directory_name(self, mock_selenium, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        wrapper = SeleniumWrapper(mock_selenium, None, SeleniumSettings())
        assert wrapper.context_path == f"/{Path.cwd().name}"


class TestAndWait:
    def test_and_wait_runs_command_then_waits(self, wrapper, mock_selenium):
        wrapper.click_and_wait("whatever")
        assert mock_selenium.mock_calls == [
            call.click("whatever"),
            call.wait_for_page_to_load(DEFAULT_TIMEOUT),
        ]

    def test_and_wait_with_no_arguments(self, wrapper, mock_selenium):
        wrapper.refresh_and_wait()
        assert mock_selenium.mock_calls == [
            call.refresh(),
            call.wait_for_page_to_load(DEFAULT_TIMEOUT),
        ]

    def test_and_wait_returns_command_result(self, wrapper, mock_selenium):
        mock_selenium.get_eval.return_value = "42"
        assert wrapper.get_eval_and_wait("6 * 7") == "42"

    def test_and_wait_on_unknown_command_fails_without_side_effects(self, wrapper, mock_selenium):
        with pytest.raises(MissingCommandError):
            wrapper.blah_and_wait("foo")
        assert mock_selenium.mock_calls == []


class TestForwarding:
    def test_known_commands_are_forwarded(self, wrapper, mock_selenium):
        mock_selenium.get_title.return_value = "Home"
        assert wrapper.get_title() == "Home"
        wrapper.open("/app/home")
        mock_selenium.open.assert_called_once_with("/app/home")

    def test_unknown_command_fails_without_side_effects(self, wrapper, mock_selenium, mock_processor):
        with pytest.raises(MissingCommandError) as exc_info:
            wrapper.blah_blah_blah("foo")
        assert "blah_blah_blah" in str(exc_info.value)
        assert mock_selenium.mock_calls == []
        mock_processor.do_command.assert_not_called()

    def test_unknown_command_is_an_attribute_error(self, wrapper):
        assert not hasattr(wrapper, "no_such_command")

    def test_private_names_are_not_dispatched(self, wrapper, mock_selenium):
        with pytest.raises(AttributeError):
            wrapper._secret
        assert mock_selenium.mock_calls == []

    def test_resolved_commands_are_cached(self, wrapper):
        assert "click_and_wait" not in wrapper.__dict__
        wrapper.click_and_wait("whatever")
        assert "click_and_wait" in wrapper.__dict__
        assert wrapper.click_and_wait is wrapper.__dict__["click_and_wait"]


class TestUserExtensions:
    def test_user_extension_commands_go_to_command_processor(self, wrapper, mock_processor):
        mock_processor.has_command.side_effect = lambda name: name == "some_user_extension"
        mock_processor.do_command.return_value = "result"

        assert wrapper.some_user_extension("foo", "bar") == "result"
        mock_processor.do_command.assert_called_once_with("some_user_extension", ("foo", "bar"))

    def test_non_string_arguments_are_not_user_extension_calls(self, wrapper, mock_processor):
        mock_processor.has_command.return_value = True
        with pytest.raises(MissingCommandError):
            wrapper.whatever("foo", 1)
        mock_processor.do_command.assert_not_called()

    def test_works_without_command_processor(self, mock_selenium, settings):
        wrapper = SeleniumWrapper(mock_selenium, None, settings)
        with pytest.raises(MissingCommandError):
            wrapper.some_user_extension("foo")


class TestWaitForCommands:
    def test_wait_for_boolean_accessor(self, wrapper, mock_selenium, clock):
        mock_selenium.is_text_present.side_effect = [False, False, True]
        assert wrapper.wait_for_text_present("whatever") is True
        assert mock_selenium.is_text_present.call_args_list == [call("whatever")] * 3
        assert clock.sleeps == [0.5, 0.5]

    def test_wait_for_boolean_accessor_negated(self, wrapper, mock_selenium, clock):
        mock_selenium.is_text_present.side_effect = [True, True, False]
        assert wrapper.wait_for_not_text_present("whatever") is True

    def test_wait_for_string_accessor(self, wrapper, mock_selenium, clock):
        mock_selenium.get_text.side_effect = ["incorrect", "incorrect", "correct"]
        assert wrapper.wait_for_text("whatever", "correct") is True
        mock_selenium.get_text.assert_called_with("whatever")

    def test_wait_for_string_accessor_negated(self, wrapper, mock_selenium, clock):
        mock_selenium.get_text.side_effect = ["incorrect", "incorrect", "correct"]
        assert wrapper.wait_for_not_text("whatever", "incorrect") is True

    def test_wait_for_no_args_accessor(self, wrapper, mock_selenium, clock):
        mock_selenium.get_title.side_effect = ["incorrect", "incorrect", "correct"]
        assert wrapper.wait_for_title("correct") is True
        mock_selenium.get_title.assert_called_with()

    def test_wait_for_no_args_accessor_negated(self, wrapper, mock_selenium, clock):
        mock_selenium.get_title.side_effect = ["incorrect", "incorrect", "correct"]
        assert wrapper.wait_for_not_title("incorrect") is True

    def test_wait_for_string_matching_matcher(self, wrapper, mock_selenium, clock):
        mock_selenium.get_text.side_effect = ["incorrect", "incorrect", "correct"]
        assert wrapper.wait_for_text("whatever", lambda value: value == "correct") is True

    def test_wait_for_string_matching_regex(self, wrapper, mock_selenium, clock):
        mock_selenium.get_text.side_effect = ["incorrect", "incorrect", "correct"]
        assert wrapper.wait_for_text("whatever", re.compile(r"c\w+")) is True

    def test_wait_for_string_matching_regex_negated(self, wrapper, mock_selenium, clock):
        mock_selenium.get_text.side_effect = ["incorrect", "incorrect", "correct"]
        assert wrapper.wait_for_not_text("whatever", re.compile(r"in\w+")) is True

    def test_cannot_negate_a_matcher(self, wrapper, mock_selenium):
        with pytest.raises(MissingCommandError):
            wrapper.wait_for_not_text("whatever", lambda value: value == "correct")
        assert mock_selenium.mock_calls == []

    def test_wait_for_times_out(self, wrapper, mock_selenium, clock):
        mock_selenium.is_text_present.return_value = False
        wrapper.timeout = "1000"
        with pytest.raises(WaitTimedOutError) as exc_info:
            wrapper.wait_for_text_present("whatever")
        assert str(exc_info.value) == "Timed out waiting for is_text_present(whatever)"
        assert clock.now == 1.0

    def test_timeout_message_names_expected_value(self, wrapper, mock_selenium, clock):
        mock_selenium.get_text.return_value = "incorrect"
        wrapper.timeout = "1000"
        with pytest.raises(WaitTimedOutError) as exc_info:
            wrapper.wait_for_text("whatever", "correct")
        assert str(exc_info.value) == 'Timed out waiting for get_text(whatever) to be "correct"'

    def test_negated_timeout_message(self, wrapper, mock_selenium, clock):
        mock_selenium.get_text.return_value = "incorrect"
        wrapper.timeout = 1000
        with pytest.raises(WaitTimedOutError) as exc_info:
            wrapper.wait_for_not_text("whatever", "incorrect")
        assert str(exc_info.value) == 'Timed out waiting for get_text(whatever) not to be "incorrect"'

    def test_wait_for_unknown_accessor_fails(self, wrapper, mock_selenium):
        with pytest.raises(MissingCommandError):
            wrapper.wait_for_blah_blah_blah("foo")
        assert mock_selenium.mock_calls == []

    def test_wait_for_accessor_requires_expected_value(self, wrapper, mock_selenium):
        with pytest.raises(MissingCommandError):
            wrapper.wait_for_text()
        assert mock_selenium.mock_calls == []

    def test_driver_wait_commands_are_forwarded(self, wrapper, mock_selenium):
        wrapper.wait_for_condition("window.ready", 3000)
        mock_selenium.wait_for_condition.assert_called_once_with("window.ready", 3000)


class TestWaitForCondition:
    def test_wait_for_with_callable(self, wrapper, mock_selenium, clock):
        mock_selenium.get_text.side_effect = ["incorrect", "incorrect", "correct"]
        wrapper.wait_for("whatever to be correct", lambda: wrapper.get_text("whatever") == "correct")
        assert mock_selenium.get_text.call_count == 3

    def test_wait_for_with_callable_fails_on_timeout(self, wrapper, mock_selenium, clock):
        mock_selenium.get_text.return_value = "incorrect"
        wrapper.timeout = "1000"
        with pytest.raises(WaitTimedOutError) as exc_info:
            wrapper.wait_for("whatever to be correct", lambda: wrapper.get_text("whatever") == "correct")
        assert str(exc_info.value) == "Timed out waiting for whatever to be correct"
