from song_library.api.routes import router

__all__ = ["router"]
