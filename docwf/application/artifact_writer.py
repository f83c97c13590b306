from pathlib import Path

from docwf.application.result_aggregator import ResultAggregator, format_feedback_log
from docwf.domain.constants import FEEDBACK_LOG_FILENAME, FINAL_DOCUMENT_FILENAME


class ArtifactWriteError(Exception):
    """Raised when artifact writing fails."""
    pass


class ArtifactWriter:
    """Writes run results to an output directory."""

    def __init__(
        self,
        document_filename: str = FINAL_DOCUMENT_FILENAME,
        feedback_filename: str = FEEDBACK_LOG_FILENAME,
    ) -> None:
        self.document_filename = document_filename
        self.feedback_filename = feedback_filename

    def write(self, results: ResultAggregator, output_dir: Path) -> list[Path]:
        """
        Write the final document and feedback log.

        The document is written only when present; the feedback log only when
        at least one reviewer asked for a revision. Existing files are replaced.

        Returns:
            Paths written, document first

        Raises:
            ArtifactWriteError: If the directory or a file cannot be written
        """
        written: list[Path] = []
        final_document = results.final_document()
        feedback = results.feedback_log()

        if final_document is None and not feedback:
            return written

        try:
            output_dir.mkdir(parents=True, exist_ok=True)

            if final_document is not None:
                doc_path = output_dir / self.document_filename
                doc_path.write_text(final_document, encoding="utf-8")
                written.append(doc_path)

            if feedback:
                log_path = output_dir / self.feedback_filename
                log_path.write_text(format_feedback_log(feedback), encoding="utf-8")
                written.append(log_path)
        except OSError as e:
            raise ArtifactWriteError(f"Failed to write artifacts to {output_dir}: {e}") from e

        return written
