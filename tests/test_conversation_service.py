"""Tests for the conversation state machine."""

import random
import threading

import pytest

from bot import messages
from models.domain import ButtonPress, Command, FreeText
from models.enums import DialogueState, MenuButton
from services.conversation_service import MAIN_MENU, ConversationEngine
from services.motivation_service import MotivationProvider
from services.user_store import UserStore

CHAT = 1001


@pytest.fixture
def store():
    return UserStore()


@pytest.fixture
def engine(store):
    motivation = MotivationProvider(["Go!"], rng=random.Random(1))
    return ConversationEngine(store, motivation, skip_tokens=["no"])


def press(engine, button, chat=CHAT):
    return engine.handle(chat, ButtonPress(button_id=button.value))


def say(engine, text, chat=CHAT):
    return engine.handle(chat, FreeText(text=text))


def log_training(engine, group, duration, weight, chat=CHAT):
    press(engine, MenuButton.NEW_TRAINING, chat)
    say(engine, group, chat)
    say(engine, duration, chat)
    return say(engine, weight, chat)


class TestMenu:
    """Tests for /start and menu buttons."""

    @pytest.mark.parametrize("name", ["start", "START", "Start"])
    def test_start_renders_main_menu(self, engine, name):
        reply = engine.handle(CHAT, Command(name=name))
        assert reply.text == messages.MENU_TITLE
        assert reply.menu == MAIN_MENU

    def test_main_menu_offers_every_button(self):
        ids = {button_id for row in MAIN_MENU.rows for _, button_id in row}
        assert ids == {b.value for b in MenuButton}

    def test_start_keeps_state(self, engine, store):
        press(engine, MenuButton.NEW_TRAINING)
        engine.handle(CHAT, Command(name="start"))
        assert store.get_state(CHAT) is DialogueState.AWAITING_MUSCLE_GROUP

    def test_unknown_command(self, engine, store):
        press(engine, MenuButton.NEW_TRAINING)
        reply = engine.handle(CHAT, Command(name="help"))
        assert reply.text == messages.USE_MENU
        assert store.get_state(CHAT) is DialogueState.AWAITING_MUSCLE_GROUP
        assert store.current_entry(CHAT).muscle_group is None

    def test_unknown_button_leaves_state(self, engine, store):
        press(engine, MenuButton.NEW_TRAINING)
        reply = engine.handle(CHAT, ButtonPress(button_id="new_training"))
        assert reply.text == messages.USE_MENU
        assert store.get_state(CHAT) is DialogueState.AWAITING_MUSCLE_GROUP

    def test_motivate(self, engine):
        assert press(engine, MenuButton.MOTIVATE).text == "Go!"

    def test_reports_on_empty_history(self, engine):
        assert press(engine, MenuButton.TOTAL_TIME).text == messages.TOTAL_TIME_EMPTY
        assert press(engine, MenuButton.AVERAGE_TIME).text == messages.AVERAGE_TIME_EMPTY
        assert press(engine, MenuButton.TOTAL_WEIGHT).text == messages.TOTAL_WEIGHT_EMPTY
        assert press(engine, MenuButton.LAST_TRAINING).text == messages.LAST_TRAINING_EMPTY

    def test_idle_text_falls_back_to_menu_hint(self, engine, store):
        assert say(engine, "hello").text == messages.USE_MENU
        assert store.get_state(CHAT) is DialogueState.IDLE

    def test_every_state_has_a_text_handler(self, engine, store):
        for state in DialogueState:
            store.set_state(CHAT, state)
            if state is not DialogueState.IDLE:
                store.set_state(CHAT, DialogueState.AWAITING_MUSCLE_GROUP)
                store.set_state(CHAT, state)
            assert say(engine, "x").text


class TestTrainingFlow:
    """Tests for the guided training entry."""

    def test_full_round_trip(self, engine, store):
        assert press(engine, MenuButton.NEW_TRAINING).text == messages.NEW_TRAINING
        assert store.get_state(CHAT) is DialogueState.AWAITING_MUSCLE_GROUP

        assert say(engine, "Legs").text == messages.PROMPT_DURATION
        assert store.get_state(CHAT) is DialogueState.AWAITING_DURATION

        assert say(engine, "1.5").text == messages.PROMPT_WEIGHT
        assert store.get_state(CHAT) is DialogueState.AWAITING_WEIGHT

        reply = say(engine, "80")
        assert reply.text == messages.SAVE_SUCCESS.format(total_time="Total training time: 1.50 hours.")
        assert store.get_state(CHAT) is DialogueState.IDLE

        history = store.history(CHAT)
        assert len(history) == 1
        assert history[0].muscle_group == "Legs"
        assert history[0].duration_hours == 1.5
        assert history[0].weight == 80.0

    @pytest.mark.parametrize("answer", ["No", "no", "NO"])
    def test_weight_can_be_skipped(self, engine, store, answer):
        log_training(engine, "Back", "2", answer)
        history = store.history(CHAT)
        assert len(history) == 1
        assert history[0].weight is None
        assert store.get_state(CHAT) is DialogueState.IDLE

    def test_comma_decimal_separator(self, engine, store):
        log_training(engine, "Arms", "0,75", "12,5")
        entry = store.history(CHAT)[0]
        assert entry.duration_hours == 0.75
        assert entry.weight == 12.5

    def test_invalid_duration_keeps_state(self, engine, store):
        press(engine, MenuButton.NEW_TRAINING)
        say(engine, "Legs")
        reply = say(engine, "abc")
        assert reply.text == messages.ERROR_INVALID_DURATION
        assert store.get_state(CHAT) is DialogueState.AWAITING_DURATION
        assert store.history(CHAT) == ()
        assert store.current_entry(CHAT).duration_hours is None

    @pytest.mark.parametrize("text", ["1_5", "1_000"])
    def test_underscored_duration_is_rejected(self, engine, store, text):
        press(engine, MenuButton.NEW_TRAINING)
        say(engine, "Legs")
        assert say(engine, text).text == messages.ERROR_INVALID_DURATION
        assert store.get_state(CHAT) is DialogueState.AWAITING_DURATION
        assert store.current_entry(CHAT).duration_hours is None

    def test_invalid_weight_does_not_finalize(self, engine, store):
        press(engine, MenuButton.NEW_TRAINING)
        say(engine, "Legs")
        say(engine, "1")
        reply = say(engine, "heavy")
        assert reply.text == messages.ERROR_INVALID_WEIGHT
        assert store.get_state(CHAT) is DialogueState.AWAITING_WEIGHT
        assert store.history(CHAT) == ()

        say(engine, "60")
        assert store.history(CHAT)[0].weight == 60.0

    def test_negative_numbers_are_accepted(self, engine, store):
        log_training(engine, "Legs", "-1", "-5")
        entry = store.history(CHAT)[0]
        assert entry.duration_hours == -1.0
        assert entry.weight == -5.0

    def test_blank_muscle_group_is_asked_again(self, engine, store):
        press(engine, MenuButton.NEW_TRAINING)
        assert say(engine, "   ").text == messages.NEW_TRAINING
        assert store.get_state(CHAT) is DialogueState.AWAITING_MUSCLE_GROUP

    def test_new_training_mid_flow_discards_old_one(self, engine, store):
        press(engine, MenuButton.NEW_TRAINING)
        say(engine, "Back")
        say(engine, "3")
        log_training(engine, "Chest", "1", "no")
        history = store.history(CHAT)
        assert [e.muscle_group for e in history] == ["Chest"]

    def test_reports_after_trainings(self, engine):
        log_training(engine, "Legs", "1", "50")
        log_training(engine, "Back", "0.5", "no")
        assert press(engine, MenuButton.TOTAL_TIME).text == "Total training time: 1.50 hours."
        assert press(engine, MenuButton.AVERAGE_TIME).text == "Average training time: 0.75 hours."
        assert press(engine, MenuButton.TOTAL_WEIGHT).text == messages.TOTAL_WEIGHT.format(value=50.0)
        last = press(engine, MenuButton.LAST_TRAINING).text
        assert "Muscle group: Back" in last
        assert "Duration: 30 minutes" in last

    def test_buttons_work_in_the_middle_of_a_training(self, engine, store):
        press(engine, MenuButton.NEW_TRAINING)
        say(engine, "Legs")
        press(engine, MenuButton.TOTAL_TIME)
        assert store.get_state(CHAT) is DialogueState.AWAITING_DURATION


class TestIsolation:
    """Tests that chats never see each other's state."""

    def test_interleaved_chats(self, engine, store):
        press(engine, MenuButton.NEW_TRAINING, chat=1)
        press(engine, MenuButton.NEW_TRAINING, chat=2)
        say(engine, "Legs", chat=1)
        say(engine, "Arms", chat=2)
        say(engine, "1", chat=1)
        assert store.get_state(1) is DialogueState.AWAITING_WEIGHT
        assert store.get_state(2) is DialogueState.AWAITING_DURATION

    def test_concurrent_chats(self, engine, store):
        errors = []

        def run(chat_id):
            try:
                for _ in range(20):
                    log_training(engine, f"group-{chat_id}", str(chat_id), "no", chat=chat_id)
            except Exception as exc:  # surfaced through the errors list
                errors.append(exc)

        threads = [threading.Thread(target=run, args=(chat_id,)) for chat_id in range(1, 7)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        for chat_id in range(1, 7):
            history = store.history(chat_id)
            assert len(history) == 20
            assert {e.muscle_group for e in history} == {f"group-{chat_id}"}
            assert {e.duration_hours for e in history} == {float(chat_id)}
            assert store.get_state(chat_id) is DialogueState.IDLE
