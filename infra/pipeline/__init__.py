from infra.pipeline.logger import PipelineLogger, create_logger
from infra.pipeline.rich_progress import RichProgressBar

__all__ = [
    "PipelineLogger",
    "create_logger",
    "RichProgressBar",
]
