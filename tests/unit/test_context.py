from barista.conversation.models import ConversationTurn, Speaker
from barista.planner.context import ContextAnalyzer


def user(text):
    return ConversationTurn(speaker=Speaker.SHOPPER, text=text)


def assistant(text):
    return ConversationTurn(speaker=Speaker.ASSISTANT, text=text)


def test_empty_history_has_no_signals():
    context = ContextAnalyzer().analyze("hi")

    assert context.assistant_question_count == 0
    assert not context.shows_impatience
    assert not context.is_expert
    assert not (context.asked_about_acidity or context.asked_about_price or context.asked_about_roast)


def test_counts_only_assistant_turns_with_question_marks():
    history = [
        user("hello?"),
        assistant("Welcome! Which flavor do you enjoy?"),
        user("fruity"),
        assistant("Nice choice."),
        assistant("您的預算大概多少？"),
    ]
    context = ContextAnalyzer().analyze("around 500", history)

    assert context.assistant_question_count == 2


def test_topics_are_read_from_assistant_turns():
    history = [
        assistant("Do you like bright acidity?"),
        assistant("請問您偏好什麼烘焙程度？"),
    ]
    context = ContextAnalyzer().analyze("either is fine", history)

    assert context.asked_about_acidity
    assert context.asked_about_roast
    assert not context.asked_about_price


def test_shopper_mentions_do_not_count_as_asked():
    context = ContextAnalyzer().analyze("what about the price?")

    assert not context.asked_about_price
    assert context.assistant_question_count == 0


def test_impatience_and_expertise_come_from_the_newest_question():
    context = ContextAnalyzer().analyze("快點推薦，我在意萃取率")

    assert context.shows_impatience
    assert context.is_expert


def test_expertise_from_earlier_shopper_turn():
    context = ContextAnalyzer().analyze("ok", [user("I do cupping at home")])

    assert context.is_expert
