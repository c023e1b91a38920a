from barista.conversation.models import ConversationTurn, Speaker
from barista.planner.preferences import PreferenceExtractor, build_text_pool
from barista.planner.types import AcidityBand, FlavorCategory, PriceRange, Roast, SpecialSort


def user(text):
    return ConversationTurn(speaker=Speaker.SHOPPER, text=text)


def assistant(text):
    return ConversationTurn(speaker=Speaker.ASSISTANT, text=text)


def test_greeting_yields_no_preferences():
    prefs = PreferenceExtractor().extract("hi")

    assert not prefs.has_any()
    assert prefs.as_dict() == {}


def test_flavor_and_acidity_from_english():
    prefs = PreferenceExtractor().extract("I like fruity, bright coffee")

    assert prefs.flavor_category is FlavorCategory.FRUITY
    assert prefs.acidity_band is AcidityBand.HIGH
    assert prefs.price is None
    assert prefs.roast is None


def test_chinese_flavor_and_budget_with_currency_suffix():
    prefs = PreferenceExtractor().extract("我想要果香的咖啡，預算500元")

    assert prefs.flavor_category is FlavorCategory.FRUITY
    assert prefs.price == PriceRange(budget=500)


def test_budget_prefix_form():
    prefs = PreferenceExtractor().extract("recommend something, budget 400")

    assert prefs.price == PriceRange(budget=400)
    assert prefs.as_dict() == {"price": {"budget": 400}}


def test_budget_below_minimum_is_ignored():
    prefs = PreferenceExtractor().extract("budget 50 dollars")

    assert prefs.price is None


def test_price_keyword_maps_to_range():
    assert PreferenceExtractor().extract("something cheap please").price == PriceRange(maximum=500)
    assert PreferenceExtractor().extract("a premium bean").price == PriceRange(minimum=1000)
    assert PreferenceExtractor().extract("中價位的就好").price == PriceRange(minimum=400, maximum=800)


def test_roast_patterns_distinguish_compound_levels():
    extractor = PreferenceExtractor()

    assert extractor.extract("我喜歡中焙").roast is Roast.MEDIUM
    assert extractor.extract("淺中焙比較好").roast is Roast.LIGHT
    assert extractor.extract("中深焙可以").roast is Roast.DARK
    assert extractor.extract("a dark roast").roast is Roast.DARK


def test_origin_and_variety_detection():
    prefs = PreferenceExtractor().extract("Do you have any Ethiopian geisha?")

    assert prefs.origin == "Ethiopia"
    assert prefs.specific_name == "Geisha"


def test_processing_method_used_when_no_variety():
    prefs = PreferenceExtractor().extract("有日曬的豆子嗎")

    assert prefs.specific_name == "Natural"


def test_special_sort_detection():
    extractor = PreferenceExtractor()

    assert extractor.extract("What's your most popular coffee?").special_sort is SpecialSort.MOST_POPULAR
    assert extractor.extract("最貴的是哪一支").special_sort is SpecialSort.MOST_EXPENSIVE
    assert extractor.extract("the cheapest one").special_sort is SpecialSort.CHEAPEST


def test_earlier_shopper_turns_contribute_and_assistant_turns_do_not():
    history = [
        user("I usually drink nutty coffee"),
        assistant("Great! Do you prefer a light roast or something fruity?"),
    ]
    prefs = PreferenceExtractor().extract("budget 600", history)

    assert prefs.flavor_category is FlavorCategory.NUTTY
    assert prefs.roast is None
    assert prefs.price == PriceRange(budget=600)


def test_first_matching_rule_wins_within_a_dimension():
    prefs = PreferenceExtractor().extract("floral is nice but I love fruity")

    assert prefs.flavor_category is FlavorCategory.FRUITY


def test_custom_keyword_table():
    extractor = PreferenceExtractor(flavor_keywords=((FlavorCategory.BOLD, ("espresso",)),))

    assert extractor.extract("an espresso blend").flavor_category is FlavorCategory.BOLD
    assert extractor.extract("fruity").flavor_category is None


def test_text_pool_is_casefolded_and_includes_question():
    pool = build_text_pool("Budget 500", [user("FRUITY"), assistant("Any roast?")])

    assert pool == "fruity\nbudget 500"
