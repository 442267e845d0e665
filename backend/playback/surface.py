class EmbeddingSurface:
    """
    The iframe hosting third-party playback. Subclasses push mount/unmount to
    a real client; the base class only records what is mounted.
    """

    def __init__(self):
        self.view = None

    @property
    def mounted(self) -> bool:
        return self.view is not None

    async def mount(self, view):
        self.view = view

    async def unmount(self):
        self.view = None
