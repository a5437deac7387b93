from .tmdb import TmdbClientPort

__all__ = ["TmdbClientPort"]
