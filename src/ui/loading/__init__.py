"""
Loading screen presentation exports.
"""

from src.ui.loading.loading_presenter import LoadingPresenter, PygameLoadingPresenter
from src.ui.loading.loading_widgets import ImageIndicator, ThrobberWidget

__all__ = [
    'LoadingPresenter',
    'PygameLoadingPresenter',
    'ImageIndicator',
    'ThrobberWidget',
]
