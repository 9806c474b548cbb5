class StubModelClient:
    """
    Stand-in for GeminiClient that never touches the network.
    Returns canned text, or raises `error` when one is given.
    """

    def __init__(self, reply: str = "Respuesta de prueba", error: Exception = None):
        self.reply = reply
        self.error = error
        self.calls = []

    async def _answer(self, name, *args):
        self.calls.append((name, args))
        if self.error is not None:
            raise self.error
        return self.reply

    async def chat_with_inventory(self, request):
        return await self._answer("chat_with_inventory", request)

    async def suggest_daily_orders(self, inventory, usage=None):
        return await self._answer("suggest_daily_orders", inventory, usage)

    async def analyze_kitchen_image(self, image_base64, mime_type):
        return await self._answer("analyze_kitchen_image", image_base64, mime_type)
