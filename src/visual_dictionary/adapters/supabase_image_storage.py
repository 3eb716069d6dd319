"""Supabase Storage bucket for uploaded images."""

from dataclasses import dataclass

from supabase import Client

from visual_dictionary.services.analysis import ImageStorage


@dataclass
class SupabaseImageStorage(ImageStorage):
    """Stores uploads in a public Supabase Storage bucket."""

    client: Client
    bucket: str

    def upload(self, path: str, content: bytes, content_type: str) -> None:
        """Upload bytes to the bucket."""
        self.client.storage.from_(self.bucket).upload(
            path=path,
            file=content,
            file_options={"content-type": content_type},
        )

    def public_url(self, path: str) -> str:
        """Return the public URL for a stored object."""
        return self.client.storage.from_(self.bucket).get_public_url(path)
