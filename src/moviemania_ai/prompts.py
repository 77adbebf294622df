"""Prompt builders for the review-assistant operations.

Each returns a single user prompt. Operations that expect structured output
end with an explicit "JSON only" instruction; clean_json() handles models
that ignore it.
"""

import json

_JSON_ONLY = "Return ONLY the JSON."


def _join(items) -> str:
    return ", ".join(str(i) for i in items or [])


def review_draft(movie_title: str, rating, genres: list[str]) -> str:
    return (
        f'Write a short, engaging movie review for "{movie_title}" '
        f"(Genres: {_join(genres)}).\n"
        f"The rating is {rating}/5.\n"
        "Keep it under 100 words.\n"
        "Focus on why someone might give this rating.\n"
        "Do not include spoilers."
    )


def expand_thoughts(bullet_points: str) -> str:
    return (
        "Expand these bullet points into a cohesive movie review paragraph.\n"
        "Maintain the original tone.\n\n"
        f"Bullet points:\n{bullet_points}\n\n"
        "Output only the paragraph."
    )


def remove_spoilers(review_text: str) -> str:
    return (
        "Rewrite the following movie review to remove any major plot spoilers "
        "while keeping the sentiment and opinion intact.\n"
        "If there are no spoilers, return the text as is.\n\n"
        f'Review:\n"{review_text}"'
    )


def sentiment(text: str) -> str:
    return (
        "Analyze the sentiment of this movie review.\n"
        "Return a JSON object with:\n"
        '- sentiment: "positive", "negative", or "neutral"\n'
        "- score: number between 0 (negative) and 100 (positive)\n"
        "- keyPhrases: array of strings (top 3 phrases)\n\n"
        f'Review:\n"{text}"\n\n'
        f"{_JSON_ONLY}"
    )


def tags(review_text: str) -> str:
    return (
        "Suggest 5 relevant tags for this movie review.\n"
        "Tags should be single words or short phrases (max 2 words).\n"
        "Return purely a JSON array of strings.\n\n"
        f'Review:\n"{review_text}"'
    )


def natural_query(query: str) -> str:
    return (
        "Parse this natural language movie/TV search query into structured "
        "search parameters.\n"
        f'Query: "{query}"\n\n'
        "Return a JSON object with:\n"
        '- type: "movie", "tv", or "mixed"\n'
        '- genres: array of genre strings (e.g. "Action", "Comedy")\n'
        "- yearRange: { start: number, end: number } or null\n"
        "- rating: { min: number } or null\n"
        "- keywords: array of strings\n"
        '- sortBy: "popularity.desc", "vote_average.desc", '
        '"primary_release_date.desc"\n'
        "- mood: string (inferred mood if any)\n\n"
        f"{_JSON_ONLY}"
    )


def similar_movies(movie_title: str, modifier: str) -> str:
    return (
        f'Suggest 5 movies that are similar to "{movie_title}" but are '
        f'specifically "{modifier}".\n'
        "Return a JSON array of objects with:\n"
        "- title: string\n"
        "- reason: short explanation (max 1 sentence)\n\n"
        f"{_JSON_ONLY}"
    )


def rating_prediction(user_taste: dict, movie_data: dict) -> str:
    return (
        f'Predict a rating (0-5 stars) for the movie "{movie_data.get("title")}" '
        "based on this user's taste profile.\n\n"
        "User Taste:\n"
        f"- Favorite Genres: {_join(user_taste.get('favoriteGenres'))}\n"
        f"- Average Rating: {user_taste.get('avgRating')}\n"
        f"- Top Keywords: {_join(user_taste.get('keywords'))}\n\n"
        "Movie Data:\n"
        f"- Genres: {_join(movie_data.get('genres'))}\n"
        f"- Overview: {movie_data.get('overview', '')}\n"
        f"- Vote Average: {movie_data.get('voteAverage')}\n\n"
        "Return a JSON object with:\n"
        "- predictedRating: number (0.0 to 5.0)\n"
        "- confidence: number (0.0 to 1.0)\n"
        "- reasoning: short explanation (max 1 sentence)\n\n"
        f"{_JSON_ONLY}"
    )


def taste_match(user_taste: dict, movie_data: dict) -> str:
    return (
        'Calculate a "Taste Match" percentage for this user and movie.\n\n'
        f"User Taste: {json.dumps(user_taste)}\n"
        f'Movie: "{movie_data.get("title")}" '
        f"(Genres: {_join(movie_data.get('genres'))})\n\n"
        "Return a JSON object with:\n"
        "- matchPercentage: number (0 to 100)\n"
        "- factors: array of strings (top 3 matching factors)\n\n"
        f"{_JSON_ONLY}"
    )


def insights(user_profile: dict) -> str:
    return (
        "Generate 4 fun, personalized insights about this user's movie taste.\n\n"
        "User Statistics:\n"
        f"- Total Movies: {user_profile.get('totalMovies')}\n"
        f"- Favorite Genres: {_join(user_profile.get('favoriteGenres'))}\n"
        f"- Top Directors: {_join(user_profile.get('topDirectors'))}\n"
        f"- Top Actors: {_join(user_profile.get('topActors'))}\n"
        f"- Average Rating: {user_profile.get('avgRating')}\n"
        f"- Watch Patterns: {user_profile.get('watchPatterns')}\n\n"
        "Return a JSON array of objects with:\n"
        '- title: Catchy title (e.g. "Nolan Superfan", "Weekend Warrior")\n'
        "- description: One sentence explanation\n"
        '- icon: Suggested icon name (one of: "Trophy", "Flame", "Clock", '
        '"Heart", "Zap", "Brain")\n'
        '- type: "stat" or "fun-fact"\n\n'
        f"{_JSON_ONLY}"
    )
