"""GeminiService: review-assistant operations on top of the dispatcher."""

import asyncio

from moviemania_ai import prompts
from moviemania_ai._json import clean_json
from moviemania_ai.config import Settings, load_settings
from moviemania_ai.dispatcher import Dispatcher
from moviemania_ai.providers import gemini
from moviemania_ai.providers._pool import ClientPool


def run_sync(coro):
    """Run a coroutine from synchronous code (scripts, notebooks, the CLI).

    Inside an already running loop (Jupyter) nest_asyncio lets it re-enter.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)

    import nest_asyncio

    nest_asyncio.apply()
    loop = asyncio.get_event_loop()
    return loop.run_until_complete(coro)


class GeminiService:
    """Review-assistant operations with key rotation and retries.

    Every operation accepts `preferred_key_index`: an integer hint (usually
    from the X-AI-Key-Index header) that pins which key a call starts from.
    Without it, calls take turns across the pool.

    Token counts are cumulative across calls.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        pool: ClientPool | None = None,
        sleep=asyncio.sleep,
    ):
        self.settings = settings or load_settings()
        self.model = gemini.model_id(self.settings.model)
        if pool is None:
            pool = gemini.create_pool(self.settings)
        self._dispatcher = Dispatcher(pool, sleep=sleep)
        self.total_input_tokens = 0
        self.total_output_tokens = 0

    @property
    def has_ai(self) -> bool:
        return self._dispatcher.has_ai

    @property
    def pool(self) -> ClientPool:
        return self._dispatcher.pool

    async def execute(self, operation, *, max_retries=None, preferred_key_index=None):
        """Run `operation(client)` under the rotation/retry policy."""
        return await self._dispatcher.execute(
            operation,
            max_retries=(
                self.settings.max_retries if max_retries is None else max_retries
            ),
            preferred_key_index=preferred_key_index,
        )

    async def _generate(self, client, prompt: str, postprocess=None):
        value, usage = await gemini.generate(
            client,
            self.model,
            prompt,
            cache=self.settings.cache,
            postprocess=postprocess,
        )
        self.total_input_tokens += usage.get("input_tokens", 0)
        self.total_output_tokens += usage.get("output_tokens", 0)
        return value

    async def _text(self, prompt: str, preferred_key_index) -> str:
        async def op(client):
            return await self._generate(client, prompt)

        return await self.execute(op, preferred_key_index=preferred_key_index)

    async def _json(self, prompt: str, preferred_key_index):
        # Parse failures surface as ParseError; they are not retried on other keys
        # and the unparseable reply is not cached.
        async def op(client):
            return await self._generate(client, prompt, postprocess=clean_json)

        return await self.execute(op, preferred_key_index=preferred_key_index)

    # --- Free-text operations ---

    async def generate_review_draft(
        self, movie_title: str, rating, genres=None, preferred_key_index=None
    ) -> str:
        prompt = prompts.review_draft(movie_title, rating, genres or [])
        return await self._text(prompt, preferred_key_index)

    async def expand_thoughts(self, bullet_points: str, preferred_key_index=None):
        prompt = prompts.expand_thoughts(bullet_points)
        return await self._text(prompt, preferred_key_index)

    async def remove_spoilers(self, review_text: str, preferred_key_index=None) -> str:
        prompt = prompts.remove_spoilers(review_text)
        return await self._text(prompt, preferred_key_index)

    # --- Structured (JSON) operations ---

    async def analyze_sentiment(self, text: str, preferred_key_index=None) -> dict:
        return await self._json(prompts.sentiment(text), preferred_key_index)

    async def suggest_tags(self, review_text: str, preferred_key_index=None) -> list:
        return await self._json(prompts.tags(review_text), preferred_key_index)

    async def parse_natural_query(self, query: str, preferred_key_index=None) -> dict:
        return await self._json(prompts.natural_query(query), preferred_key_index)

    async def find_similar_movies(
        self, movie_title: str, modifier: str, preferred_key_index=None
    ) -> list:
        prompt = prompts.similar_movies(movie_title, modifier)
        return await self._json(prompt, preferred_key_index)

    async def predict_rating(
        self, user_taste: dict, movie_data: dict, preferred_key_index=None
    ) -> dict:
        prompt = prompts.rating_prediction(user_taste, movie_data)
        return await self._json(prompt, preferred_key_index)

    async def calculate_taste_match(
        self, user_taste: dict, movie_data: dict, preferred_key_index=None
    ) -> dict:
        prompt = prompts.taste_match(user_taste, movie_data)
        return await self._json(prompt, preferred_key_index)

    async def generate_insights(self, user_profile: dict, preferred_key_index=None):
        return await self._json(prompts.insights(user_profile), preferred_key_index)
