import math

DEFAULT_WORDS_PER_MINUTE = 200


def calculate_reading_time(text: str, words_per_minute: int = DEFAULT_WORDS_PER_MINUTE) -> int:
    words = text.split()
    return max(1, math.ceil(len(words) / words_per_minute))
