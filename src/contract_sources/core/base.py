"""Base pipeline state and collaborators."""

from pathlib import Path
from typing import Optional

from ..extraction.source_code import ProxyResolver, SourcePayloadParser
from ..storage import FileTreeWriter


class PipelineBase:
    """Holds the collaborators shared by all pipeline stages."""

    def __init__(
        self,
        client,
        output_dir: Path,
        parser: Optional[SourcePayloadParser] = None,
        writer: Optional[FileTreeWriter] = None,
        resolver: Optional[ProxyResolver] = None,
    ):
        """
        Args:
            client: ExplorerClient (or any object with ``request(address)``)
            output_dir: Root directory; one subdirectory per address
            parser: Source payload parser
            writer: File tree writer
            resolver: Proxy resolver bound to ``client``
        """
        self.client = client
        self.output_dir = Path(output_dir)
        self.parser = parser or SourcePayloadParser()
        self.writer = writer or FileTreeWriter()
        self.resolver = resolver or ProxyResolver(client)
