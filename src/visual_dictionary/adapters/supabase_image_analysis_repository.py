"""Supabase repository for the image analysis log."""

from dataclasses import dataclass

from supabase import Client

from visual_dictionary.services.analysis import ImageAnalysisRepository


@dataclass
class SupabaseImageAnalysisRepository(ImageAnalysisRepository):
    """Writes one image_analysis row per analyzed upload."""

    client: Client

    def record_analysis(
        self, image_path: str, analysis_data: list[dict[str, object]]
    ) -> None:
        """Create an image_analysis row."""
        self.client.table("image_analysis").insert(
            {"image_path": image_path, "analysis_data": analysis_data}
        ).execute()
