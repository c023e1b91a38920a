"""Keyword tables driving the rule-based planner.

Every table is ordered: the first entry that matches wins, so the order of
declaration is part of the behaviour. Text is matched after case-folding, so
English keywords are written in lower case. Chinese aliases cover the
storefront's Traditional Chinese shoppers.
"""

from __future__ import annotations

import re

from .types import AcidityBand, FlavorCategory, FollowUpTopic, PriceRange, Roast, SpecialSort

FLAVOR_KEYWORDS: tuple[tuple[FlavorCategory, tuple[str, ...]], ...] = (
    (
        FlavorCategory.FRUITY,
        ("fruity", "fruit", "berry", "berries", "citrus", "果香", "水果", "果酸", "莓", "柑橘"),
    ),
    (
        FlavorCategory.FLORAL,
        ("floral", "flower", "jasmine", "fragrance", "fragrant", "花香", "茉莉", "香氣"),
    ),
    (
        FlavorCategory.NUTTY,
        (
            "nutty",
            "nuts",
            "hazelnut",
            "almond",
            "chocolate",
            "cocoa",
            "caramel",
            "balance",
            "堅果",
            "巧克力",
            "可可",
            "焦糖",
            "平衡",
        ),
    ),
    (
        FlavorCategory.BOLD,
        ("heavy", "thick", "bitter", "smoky", "bold", "濃", "厚", "苦", "煙燻"),
    ),
)

ACIDITY_KEYWORDS: tuple[tuple[AcidityBand, tuple[str, ...]], ...] = (
    (AcidityBand.HIGH, ("high acid", "bright", "高酸", "明亮", "酸度高")),
    (AcidityBand.LOW, ("low acid", "not sour", "不酸", "低酸", "酸度低", "不要酸")),
    (AcidityBand.MEDIUM, ("medium acid", "balanced", "whatever", "中酸", "適中", "都可以")),
)

# A number sitting next to a currency or budget word.
BUDGET_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"(\d[\d,]*)\s*(?:元|塊|dollars?\b|bucks\b|ntd\b|twd\b|以內|以下)"),
    re.compile(r"(?:nt\$|\$|ntd|twd|budget(?:\s+(?:of|is))?|under|below|within|預算(?:是|大概|約)?|不超過)\s*(\d[\d,]*)"),
)
MIN_BUDGET = 100

PRICE_KEYWORDS: tuple[tuple[PriceRange, tuple[str, ...]], ...] = (
    (PriceRange(maximum=500), ("cheap", "affordable", "budget-friendly", "便宜", "平價")),
    (PriceRange(minimum=1000), ("premium", "top-tier", "high-end", "高級", "頂級")),
    (PriceRange(minimum=400, maximum=800), ("mid-range", "mid range", "中價位", "中等價位")),
)

# A bare 中 only means medium roast when it is not part of 淺中焙 or 中深焙.
ROAST_PATTERNS: tuple[tuple[Roast, re.Pattern[str]], ...] = (
    (Roast.LIGHT, re.compile(r"淺中?度?(?:焙|烘)|light[\s-]+roast|lightly roasted")),
    (Roast.MEDIUM, re.compile(r"(?<![淺深])中(?![淺深])度?(?:焙|烘)|medium[\s-]+roast")),
    (Roast.DARK, re.compile(r"深度?(?:焙|烘)|dark[\s-]+roast|darkly roasted")),
)

ORIGINS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Ethiopia", ("ethiopia", "ethiopian", "yirgacheffe", "衣索比亞", "耶加雪菲")),
    ("Kenya", ("kenya", "kenyan", "肯亞")),
    ("Colombia", ("colombia", "colombian", "哥倫比亞")),
    ("Brazil", ("brazil", "brazilian", "巴西")),
    ("Panama", ("panama", "巴拿馬")),
    ("Indonesia", ("indonesia", "sumatra", "mandheling", "印尼", "蘇門答臘", "曼特寧")),
    ("Guatemala", ("guatemala", "瓜地馬拉")),
    ("Costa Rica", ("costa rica", "哥斯大黎加")),
)

VARIETIES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Geisha", ("geisha", "gesha", "藝伎", "藝妓")),
    ("Pacamara", ("pacamara", "帕卡馬拉")),
    ("SL28", ("sl28", "sl-28")),
    ("Bourbon", ("bourbon", "波旁")),
    ("Typica", ("typica", "鐵比卡")),
)

PROCESSING_METHODS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Natural", ("natural process", "sun-dried", "日曬")),
    ("Washed", ("washed", "水洗")),
    ("Honey", ("honey process", "蜜處理")),
    ("Anaerobic", ("anaerobic", "厭氧")),
)

SPECIAL_SORT_KEYWORDS: tuple[tuple[SpecialSort, tuple[str, ...]], ...] = (
    (SpecialSort.MOST_EXPENSIVE, ("most expensive", "priciest", "最貴", "最高價")),
    (SpecialSort.CHEAPEST, ("cheapest", "least expensive", "最便宜", "最平價")),
    (SpecialSort.MOST_POPULAR, ("most popular", "best seller", "bestseller", "best-selling", "最熱門", "最受歡迎", "賣最好")),
)

IMPATIENCE_KEYWORDS: tuple[str, ...] = (
    "just recommend",
    "just give me",
    "hurry",
    "quickly",
    "whatever",
    "don't care",
    "stop asking",
    "直接",
    "快點",
    "趕快",
    "隨便",
    "不用問",
)

EXPERT_KEYWORDS: tuple[str, ...] = (
    "cupping",
    "terroir",
    "extraction",
    "tds",
    "anaerobic",
    "carbonic maceration",
    "varietal",
    "masl",
    "杯測",
    "萃取",
    "風土",
    "厭氧",
    "處理法",
    "品種",
)

TOPIC_KEYWORDS: dict[FollowUpTopic, tuple[str, ...]] = {
    FollowUpTopic.ACIDITY: ("acid", "sour", "bright", "酸"),
    FollowUpTopic.PRICE: ("price", "budget", "spend", "預算", "價格", "價位", "多少錢"),
    FollowUpTopic.ROAST: ("roast", "烘焙", "焙"),
}

QUESTION_MARKS: tuple[str, ...] = ("?", "？")

DIRECT_REQUEST_KEYWORDS: tuple[str, ...] = (
    "recommend",
    "suggest",
    "give me",
    "what do you have",
    "looking for",
    "推薦",
    "建議",
    "有什麼",
    "有哪些",
    "想要",
    "找",
)
