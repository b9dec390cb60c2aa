from pathlib import Path
from typing import Iterable, List, Union

from PIL import Image as PILImage

from ..models.image import RawImage
from ..repositories.image_repository import ImageRepository


class ImageService:
    """I/O helpers.  No edge or contour logic."""
    def __init__(self, valid_exts: Iterable[str] | None = None):
        self.image_repository = ImageRepository(valid_exts)

    def load(self, path: Union[str, Path]) -> RawImage:
        """Load a single image from disk into a RawImage object."""
        return self.image_repository.load(path)

    def to_pil_image(self, img: RawImage) -> PILImage.Image:
        return self.image_repository.to_pil(img)

    def list_images(
        self,
        folder: Union[str, Path],
        *,
        recursive: bool = False,
        exts: Iterable[str] | None = None,
    ) -> List[Path]:
        return self.image_repository.list_paths(folder, recursive=recursive, exts=exts)
