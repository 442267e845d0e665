import asyncio


class DelayedCall:
    """
    Runs an async callback once after ``delay`` seconds on the running loop.

    ``cancel()`` only has an effect while the call is still waiting; once the
    callback has started it is left to finish.
    """

    def __init__(self, delay, callback):
        self.delay = delay
        self._callback = callback
        self._fired = False
        self._task = asyncio.get_running_loop().create_task(self._run())

    async def _run(self):
        await asyncio.sleep(self.delay)
        self._fired = True
        await self._callback()

    @property
    def fired(self) -> bool:
        return self._fired

    @property
    def pending(self) -> bool:
        return not self._fired and not self._task.done()

    def cancel(self) -> bool:
        if not self.pending:
            return False
        self._task.cancel()
        return True

    async def wait(self):
        """
        Wait for the call to finish or be cancelled.
        """
        try:
            await self._task
        except asyncio.CancelledError:
            if not self._task.cancelled():
                raise
