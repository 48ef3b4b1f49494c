"""
Rule-based rider assistant. Keyword rules are checked in order and the first
match wins; route questions are answered from route:<n> records in the store.
"""
import re

from .kv_store import KVStore

HELPLINE = "079-2550 3932"

_NUMBER_RE = re.compile(r"\d+")
_GREETING_RE = re.compile(r"\b(hello|hi|hey)\b")

_KEYWORD_RULES: list[tuple[tuple[str, ...], str]] = [
    (
        ("stop", "station"),
        "Which bus stop are you looking for? You can ask about specific stops like "
        "Maninagar, Kankaria, Vastrapur, etc.",
    ),
    (
        ("fare", "price", "cost"),
        "AMTS fares typically range from ₹10 to ₹20 depending on the distance. You can "
        "check specific route fares using the 'Route Finder' feature or ask me about a "
        "specific route number.",
    ),
    (
        ("timing", "time", "schedule"),
        "Most AMTS buses operate from 6:00 AM to 11:00 PM. However, timings vary by "
        "route. You can check specific route timings using the 'Know Your Route' feature "
        "or ask me about a specific route number.",
    ),
    (
        ("track", "live", "where"),
        "You can track buses in real-time using the 'Where is My Bus' feature or the "
        "'Live Bus Tracking' feature on the home screen. Just enter your route number "
        "to see live locations!",
    ),
    (
        ("pass", "monthly"),
        "AMTS offers monthly passes at discounted rates. You can purchase them at any "
        "AMTS depot or authorized ticket counter. Monthly passes are great for regular "
        "commuters and can save you up to 30%!",
    ),
]

_ROUTE_FINDING = (
    "I can help you find the best route! Please use the 'Route Finder' feature on the "
    "home screen where you can enter your starting point and destination. Or tell me "
    "specifically which locations you're traveling between."
)

_LATE_RULES: list[tuple[tuple[str, ...], str]] = [
    (
        ("near", "closest"),
        "Use the 'Nearby Stop' feature on the home screen to find bus stops near your "
        "current location. Make sure to allow location access for accurate results.",
    ),
    (
        ("help", "contact", "support"),
        "For detailed assistance, please use the 'Help & Support' feature. You can also "
        f"call our helpline at {HELPLINE} or email us at info@amts.org. We're here to help 24/7!",
    ),
]

_GREETING = (
    "Hello! How can I assist you with AMTS services today? You can ask about routes, "
    "bus stops, fares, timings, or any other information."
)

_TAIL_RULES: list[tuple[tuple[str, ...], str]] = [
    (
        ("thank",),
        "You're welcome! Feel free to ask if you need any more help with AMTS services. "
        "Have a great journey!",
    ),
    (
        ("lost", "found"),
        "If you've lost something on a bus, please contact our Lost and Found department "
        f"at the AMTS head office. Call {HELPLINE} and provide route number, date, and "
        "time of travel.",
    ),
    (
        ("wheelchair", "accessible", "disabled"),
        "Many AMTS buses are wheelchair accessible with low-floor entry. Look for buses "
        "marked with the wheelchair symbol. For specific route information about "
        "accessible buses, please call our helpline.",
    ),
]

DEFAULT_REPLY = (
    "I'm here to help with AMTS information! You can ask me about:\n"
    "• Bus routes and timings\n"
    "• Bus stops and locations\n"
    "• Fares and passes\n"
    "• Live bus tracking\n"
    "• How to reach a destination\n"
    "• General AMTS services\n\n"
    "What would you like to know?"
)


def _match(text: str, rules: list[tuple[tuple[str, ...], str]]) -> str | None:
    for keywords, reply in rules:
        if any(k in text for k in keywords):
            return reply
    return None


def describe_route(route_number: str, details: dict) -> str:
    name = f" ({details['name']})" if details.get("name") else ""
    parts = [f"Route {route_number}{name}"]
    if details.get("from") and details.get("to"):
        parts[0] += f" runs from {details['from']} to {details['to']}"
    sentences = [parts[0] + "."]
    if details.get("distance") and details.get("duration"):
        sentences.append(f"It covers {details['distance']} in approximately {details['duration']}.")
    if details.get("firstBus") and details.get("lastBus"):
        sentences.append(f"First bus: {details['firstBus']}, Last bus: {details['lastBus']}.")
    if details.get("fare") is not None:
        sentences.append(f"Fare: {details['fare']}.")
    if details.get("frequency"):
        sentences.append(f"Buses run every {details['frequency']}.")
    return " ".join(sentences)


def reply_to(message: str, store: KVStore) -> str:
    text = message.lower()

    number = _NUMBER_RE.search(text)
    if "route" in text and number:
        route_number = number.group()
        details = store.get(f"route:{route_number}")
        if isinstance(details, dict):
            return describe_route(route_number, details)
        return f"I couldn't find route {route_number}. Please check the route number and try again."

    reply = _match(text, _KEYWORD_RULES)
    if reply:
        return reply

    if ("from" in text and "to" in text) or "how to reach" in text or "which bus" in text:
        return _ROUTE_FINDING

    reply = _match(text, _LATE_RULES)
    if reply:
        return reply

    if _GREETING_RE.search(text):
        return _GREETING

    return _match(text, _TAIL_RULES) or DEFAULT_REPLY
