"""
API facade: one method per remote operation.

Each method maps its arguments onto a parameter dictionary and sends it
through the transport with the owning session. Optional arguments left at
NOT_SET are not sent at all.
"""

from typing import Any, Dict, List, Optional, Sequence

from gsapi.exceptions import ProtocolError
from gsapi.models import NOT_SET, build_parameters
from gsapi.session import Session
from gsapi.transport import Transport


class GroovesharkAPI:
    """Typed wrapper around the public web API methods."""

    def __init__(self, session: Session, transport: Optional[Transport] = None):
        """
        Initialize the facade.

        Args:
            session: Session whose credentials and session ID every call uses
            transport: Transport to send with (defaults to the session's)
        """
        self.session = session
        self.transport = transport or session.transport

    def set_session(self, session: Session) -> None:
        """Set the Session object to use."""
        self.session = session

    def _call(self, method: str, parameters: Optional[Dict[str, Any]] = None) -> Any:
        """Send a call and return its ``result``."""
        response = self.transport.send(method, parameters or {}, self.session.snapshot())
        return response.get("result")

    def _call_list(self, method: str, field: str, parameters: Optional[Dict[str, Any]] = None) -> List[Any]:
        """Send a call and return the named list inside ``result``."""
        result = self._call(method, parameters)
        if not isinstance(result, dict):
            return []
        return result.get(field, [])

    # Service

    def get_country(self, ip: Optional[str] = NOT_SET) -> Dict[str, Any]:
        """
        Get the country for an IP address.

        If the IP is omitted the service uses the address the request came from.
        """
        return self._call("getCountry", build_parameters(ip=ip))

    def ping_service(self) -> Any:
        return self._call("pingService")

    def get_service_description(self) -> Dict[str, Any]:
        return self._call("getServiceDescription")

    # User

    def get_user_info(self) -> Dict[str, Any]:
        """Get logged-in user info. Requires an authenticated session."""
        return self._call("getUserInfo")

    def get_user_subscription_details(self) -> Dict[str, Any]:
        """Get logged-in user subscription type and either dateEnd or recurring."""
        return self._call("getUserSubscriptionDetails")

    def get_user_id_from_username(self, username: str) -> Dict[str, Any]:
        return self._call("getUserIDFromUsername", {"username": username})

    # Search

    def get_song_search_results(
        self,
        query: str,
        country: Any = NOT_SET,
        limit: Optional[int] = NOT_SET,
        offset: Optional[int] = NOT_SET,
    ) -> List[Dict[str, Any]]:
        """
        Perform a song search.

        The service needs the caller's country; it is looked up with
        :meth:`get_country` when not given (or None).

        Raises:
            ProtocolError: If the country lookup returns nothing
        """
        if country is NOT_SET or country is None:
            country = self.get_country()
            if country is None:
                raise ProtocolError("Bad response from API: no country returned")
        parameters = build_parameters(
            {"query": query, "country": country}, limit=limit, offset=offset
        )
        return self._call_list("getSongSearchResults", "songs", parameters)

    def get_album_search_results(self, query: str, limit: Optional[int] = NOT_SET) -> List[Dict[str, Any]]:
        parameters = build_parameters({"query": query}, limit=limit)
        return self._call_list("getAlbumSearchResults", "albums", parameters)

    def get_artist_search_results(self, query: str, limit: Optional[int] = NOT_SET) -> List[Dict[str, Any]]:
        parameters = build_parameters({"query": query}, limit=limit)
        return self._call_list("getArtistSearchResults", "artists", parameters)

    def get_playlist_search_results(self, query: str, limit: Optional[int] = NOT_SET) -> List[Dict[str, Any]]:
        parameters = build_parameters({"query": query}, limit=limit)
        return self._call_list("getPlaylistSearchResults", "playlists", parameters)

    # Catalog

    def get_songs_info(self, song_ids: Sequence[int]) -> List[Dict[str, Any]]:
        return self._call_list("getSongsInfo", "songs", {"songIDs": list(song_ids)})

    def get_albums_info(self, album_ids: Sequence[int]) -> List[Dict[str, Any]]:
        return self._call_list("getAlbumsInfo", "albums", {"albumIDs": list(album_ids)})

    def get_artists_info(self, artist_ids: Sequence[int]) -> List[Dict[str, Any]]:
        return self._call_list("getArtistsInfo", "artists", {"artistIDs": list(artist_ids)})

    def get_album_songs(self, album_id: int, limit: Optional[int] = NOT_SET) -> List[Dict[str, Any]]:
        parameters = build_parameters({"albumID": album_id}, limit=limit)
        return self._call_list("getAlbumSongs", "songs", parameters)

    def get_artist_popular_songs(self, artist_id: int) -> List[Dict[str, Any]]:
        return self._call_list("getArtistPopularSongs", "songs", {"artistID": artist_id})

    def get_popular_songs_today(self, limit: Optional[int] = NOT_SET) -> List[Dict[str, Any]]:
        return self._call_list("getPopularSongsToday", "songs", build_parameters(limit=limit))

    # Playlists

    def get_playlist(self, playlist_id: int, limit: Optional[int] = NOT_SET) -> Dict[str, Any]:
        """Get playlist info and songs."""
        parameters = build_parameters({"playlistID": playlist_id}, limit=limit)
        return self._call("getPlaylist", parameters)

    def get_playlist_info(self, playlist_id: int) -> Dict[str, Any]:
        return self._call("getPlaylistInfo", {"playlistID": playlist_id})

    def get_playlist_songs(self, playlist_id: int, limit: Optional[int] = NOT_SET) -> List[Dict[str, Any]]:
        parameters = build_parameters({"playlistID": playlist_id}, limit=limit)
        return self._call_list("getPlaylistSongs", "songs", parameters)

    def get_user_playlists(self, limit: Optional[int] = NOT_SET) -> List[Dict[str, Any]]:
        return self._call_list("getUserPlaylists", "playlists", build_parameters(limit=limit))

    def get_user_playlists_subscribed(self) -> List[Dict[str, Any]]:
        return self._call_list("getUserPlaylistsSubscribed", "playlists")

    def create_playlist(self, name: str, song_ids: Sequence[int] = ()) -> Dict[str, Any]:
        """Create a playlist owned by the logged-in user."""
        return self._call("createPlaylist", {"name": name, "songIDs": list(song_ids)})

    def rename_playlist(self, playlist_id: int, name: str) -> Dict[str, Any]:
        return self._call("renamePlaylist", {"playlistID": playlist_id, "name": name})

    def delete_playlist(self, playlist_id: int) -> Dict[str, Any]:
        return self._call("deletePlaylist", {"playlistID": playlist_id})

    def set_playlist_songs(self, playlist_id: int, song_ids: Sequence[int]) -> Dict[str, Any]:
        """Replace the songs of a playlist."""
        return self._call("setPlaylistSongs", {"playlistID": playlist_id, "songIDs": list(song_ids)})

    def subscribe_playlist(self, playlist_id: int) -> Dict[str, Any]:
        return self._call("subscribePlaylist", {"playlistID": playlist_id})

    def unsubscribe_playlist(self, playlist_id: int) -> Dict[str, Any]:
        return self._call("unsubscribePlaylist", {"playlistID": playlist_id})

    # Favorites

    def get_user_favorite_songs(self, limit: Optional[int] = NOT_SET) -> List[Dict[str, Any]]:
        return self._call_list("getUserFavoriteSongs", "songs", build_parameters(limit=limit))

    def add_user_favorite_song(self, song_id: int) -> Dict[str, Any]:
        return self._call("addUserFavoriteSong", {"songID": song_id})

    def remove_user_favorite_songs(self, song_ids: Sequence[int]) -> Dict[str, Any]:
        return self._call("removeUserFavoriteSongs", {"songIDs": list(song_ids)})

    # Library

    def get_user_library_songs(
        self, limit: Optional[int] = NOT_SET, page: Optional[int] = NOT_SET
    ) -> List[Dict[str, Any]]:
        parameters = build_parameters(limit=limit, page=page)
        return self._call_list("getUserLibrarySongs", "songs", parameters)

    def add_user_library_songs(
        self,
        song_ids: Sequence[int],
        album_ids: Sequence[int],
        artist_ids: Sequence[int],
    ) -> Dict[str, Any]:
        """Add songs to the user's library; the three ID lists run in parallel."""
        return self._call("addUserLibrarySongs", _library_parameters(song_ids, album_ids, artist_ids))

    def remove_user_library_songs(
        self,
        song_ids: Sequence[int],
        album_ids: Sequence[int],
        artist_ids: Sequence[int],
    ) -> Dict[str, Any]:
        return self._call("removeUserLibrarySongs", _library_parameters(song_ids, album_ids, artist_ids))


def _library_parameters(
    song_ids: Sequence[int], album_ids: Sequence[int], artist_ids: Sequence[int]
) -> Dict[str, Any]:
    return {
        "songIDs": list(song_ids),
        "albumIDs": list(album_ids),
        "artistIDs": list(artist_ids),
    }
