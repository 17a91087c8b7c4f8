"""VisionClient — abstract base for vision-language task backends."""
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Callable

from moondream_client.vision.images import ImageInput
from moondream_client.vision.tasks import CaptionLength, TaskKind, TaskResult


class VisionClient(ABC):
    @abstractmethod
    async def submit(
        self, kind: TaskKind, image: ImageInput, argument: str | CaptionLength
    ) -> TaskResult:
        """Run one task and return its decoded result. Raises MoondreamError on failure."""
        ...

    @abstractmethod
    def stream(
        self, kind: TaskKind, image: ImageInput, argument: str | CaptionLength
    ) -> AsyncIterator[str]:
        """Yield text chunks of a streamed task in arrival order."""
        ...

    # ── per-task conveniences ─────────────────────────────────────────────────

    async def detect(self, image: ImageInput, obj: str) -> TaskResult:
        return await self.submit(TaskKind.DETECT, image, obj)

    async def point(self, image: ImageInput, obj: str) -> TaskResult:
        return await self.submit(TaskKind.POINT, image, obj)

    async def query(self, image: ImageInput, question: str) -> TaskResult:
        return await self.submit(TaskKind.QUERY, image, question)

    async def caption(
        self, image: ImageInput, length: CaptionLength = CaptionLength.NORMAL
    ) -> TaskResult:
        return await self.submit(TaskKind.CAPTION, image, length)

    def query_stream(self, image: ImageInput, question: str) -> AsyncIterator[str]:
        return self.stream(TaskKind.QUERY, image, question)

    def caption_stream(
        self, image: ImageInput, length: CaptionLength = CaptionLength.NORMAL
    ) -> AsyncIterator[str]:
        return self.stream(TaskKind.CAPTION, image, length)

    async def stream_to(
        self,
        kind: TaskKind,
        image: ImageInput,
        argument: str | CaptionLength,
        on_chunk: Callable[[str], None],
    ) -> str:
        """Push each chunk to `on_chunk` as it arrives; return the joined transcript."""
        received: list[str] = []
        async for chunk in self.stream(kind, image, argument):
            on_chunk(chunk)
            received.append(chunk)
        return "".join(received)
