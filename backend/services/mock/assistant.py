import json
import re


def mock_proofread(text: str) -> str:
    """Proofreading result computed locally, serialized like the model's reply"""
    words = text.split()
    sentences = [s for s in re.split(r"[.!?]+", text) if s.strip()]

    suggestions = []
    for match in re.finditer(r"\b(\w+) \1\b", text, re.IGNORECASE):
        suggestions.append({
            "type": "grammar",
            "text": match.group(0),
            "replacement": match.group(1)
        })
    for match in re.finditer(r"\bi\b", text):
        suggestions.append({"type": "spelling", "text": "i", "replacement": "I"})
    for match in re.finditer(r" {2,}", text):
        suggestions.append({"type": "style", "text": match.group(0), "replacement": " "})

    penalty = min(len(suggestions) * 5, 50)
    return json.dumps({
        "suggestions": suggestions,
        "stats": {
            "words": len(words),
            "characters": len(text),
            "sentences": len(sentences)
        },
        "score": {
            "readability": 80,
            "grammar": 100 - penalty,
            "style": 90
        }
    })


def mock_chat_reply(messages: list) -> str:
    last_user = next((m["content"] for m in reversed(messages) if m["role"] == "user"), "")
    if not last_user:
        return "[Mock reply] Ask me anything about your document."
    return f"[Mock reply] You asked: {last_user[:200]}"


def mock_article(topic: str, style: str, length: int) -> str:
    return (
        f"# {topic}\n\n"
        f"[Mock article, {style} style, about {length} words]\n\n"
        f"This is placeholder text about {topic}. Configure OPENROUTER_API_KEY to generate real articles."
    )


def mock_answer(question: str) -> str:
    return f"[Mock answer] {question[:200]}"
