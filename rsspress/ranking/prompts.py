"""Importance prompt construction."""

import random
from datetime import datetime
from typing import List, Optional, Sequence

from ..constants import DESCRIPTION_MAX_CHARS
from ..models import Article

PERSPECTIVES = {
    "en": [
        "Going with today's mood",
        "With a fresh eye",
        "From a different angle",
        "From a unique standpoint",
        "Taking a broad view",
    ],
    "ja": [
        "今日の気分で",
        "新鮮な視点で",
        "異なる角度から",
        "ユニークな観点で",
        "多様な視点で",
    ],
}


def pick_perspective(rng: random.Random, locale: str = "en") -> str:
    """Phrase that varies the framing between calls for the same theme."""
    return rng.choice(PERSPECTIVES.get(locale, PERSPECTIVES["en"]))


def format_article_list(articles: Sequence[Article], locale: str = "en") -> str:
    lines: List[str] = []
    for index, article in enumerate(articles, 1):
        description = article.description[:DESCRIPTION_MAX_CHARS]
        if locale == "ja":
            image = "あり" if article.has_image else "なし"
            lines.append(f"{index}. タイトル: {article.title}, 説明: {description}, 画像: {image}")
        else:
            image = "yes" if article.has_image else "no"
            lines.append(f"{index}. Title: {article.title}, Description: {description}, Image: {image}")
    return "\n".join(lines)


def build_importance_prompt(
    articles: Sequence[Article],
    theme: str,
    locale: str = "en",
    perspective: Optional[str] = None,
    timestamp: Optional[datetime] = None,
) -> str:
    """Single prompt scoring a whole batch; the reply must be {"scores": [...]}."""
    perspective = perspective or PERSPECTIVES.get(locale, PERSPECTIVES["en"])[0]
    generated_at = (timestamp or datetime.now()).isoformat()
    article_list = format_article_list(articles, locale)

    if locale == "ja":
        return f"""ユーザーは「{theme}」に興味があります。
{perspective}、以下の記事リストからユーザーにとっての重要度を0-100のスコアで評価してください。

評価基準（合計100点）：
1. テーマ「{theme}」との関連性: 0-60点
   - 直接関連（テーマの核心的な内容）: 50-60点
   - 間接的に関連（テーマに関係する周辺情報）: 30-49点
   - 関連性が低い（テーマとほぼ無関係）: 0-29点
2. 画像の有無: +20点（画像ありの場合のみ加算）
3. タイトルの魅力度と新鮮さ: 0-20点
   - 魅力的で新鮮なタイトル: 15-20点
   - 普通のタイトル: 8-14点
   - 平凡なタイトル: 0-7点

記事リスト：
{article_list}

注意:
- 同じような重要度の記事がある場合、少しバリエーションを持たせてください
- 関連性の評価を最優先してください
生成時刻: {generated_at}

記事の順番どおりに、各記事の重要度スコア（0-100）をJSON形式で返してください：
{{"scores": [85, 70, 60, ...]}}"""

    return f"""The reader is interested in "{theme}".
{perspective}, rate how important each article below is to this reader with a score from 0 to 100.

Rubric (100 points total):
1. Relevance to "{theme}": 0-60 points
   - Directly related (core of the theme): 50-60
   - Indirectly related (surrounding context): 30-49
   - Barely related: 0-29
2. Image: +20 points, only when the article has an image
3. Title appeal and freshness: 0-20 points
   - Compelling, fresh title: 15-20
   - Ordinary title: 8-14
   - Dull title: 0-7

Articles:
{article_list}

Notes:
- When articles are similarly important, vary their scores a little
- Relevance comes first
Generated at: {generated_at}

Return one score per article, in the order listed, as JSON only:
{{"scores": [85, 70, 60, ...]}}"""
