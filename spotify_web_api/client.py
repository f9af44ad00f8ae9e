"""Spotify Web API client

``SpotifyWebAPI.send_request`` adds the bearer token to every API request and,
when enabled through Options, recovers from an expired access token
(auto_refresh) and from a 429 response (auto_retry), each at most once per
call, before giving up.
"""

import json
import logging
import time
from typing import Any, Callable, Dict, List, Mapping, Optional, Set, Union
from urllib.parse import urlencode

from spotify_web_api.exceptions import ApiError, RateLimitedError, SpotifyWebAPIError
from spotify_web_api.http import Request, Response
from spotify_web_api.oauth import Session
from spotify_web_api.options import Options
from spotify_web_api.utils.ids import IdOrIds, get_snapshot_id, id_to_uri, to_comma_string, uri_to_id

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}

# Each recovery runs at most once per logical call
REFRESH = "refresh"
RETRY = "retry"


def _as_list(value: Union[str, List[str]]) -> List[str]:
    return [value] if isinstance(value, str) else list(value)


class SpotifyWebAPI:
    """Client for the Spotify Web API"""

    def __init__(
        self,
        options: Optional[Union[Options, Mapping[str, Any]]] = None,
        session: Optional[Session] = None,
        request: Optional[Request] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """Initialize the client

        Args:
            options: auto_refresh, auto_retry and return_assoc switches
            session: Session used for tokens and auto refresh
            request: Request facade (creates new if None)
            sleep: Function used to wait before a rate limited retry
        """
        self._options = Options.from_settings().merged(options)
        self.session = session
        self._owns_request = request is None
        self.request = request or Request()
        self.access_token = ""
        self.last_response: Optional[Response] = None
        self._sleep = sleep

    @property
    def options(self) -> Options:
        return self._options

    def set_options(self, options: Union[Options, Mapping[str, Any]]) -> "SpotifyWebAPI":
        """Merge options into the current ones; unknown keys are ignored"""
        self._options = self._options.merged(options)
        return self

    def set_session(self, session: Optional[Session]) -> "SpotifyWebAPI":
        self.session = session
        return self

    def set_access_token(self, access_token: str) -> "SpotifyWebAPI":
        """Set the access token used when no session is attached"""
        self.access_token = access_token
        return self

    def get_request(self) -> Request:
        return self.request

    def get_last_response(self) -> Optional[Response]:
        """Get the envelope of the latest API request"""
        return self.last_response

    def close(self) -> None:
        """Close the request facade if this client created it

        An attached session is owned by the caller and is not closed.
        """
        if self._owns_request:
            self.request.close()

    def __enter__(self) -> "SpotifyWebAPI":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _auth_headers(self, headers: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
        access_token = self.session.get_access_token() if self.session else self.access_token

        merged = dict(headers or {})
        if access_token:
            for name in [name for name in merged if name.lower() == "authorization"]:
                del merged[name]
            merged["Authorization"] = f"Bearer {access_token}"
        return merged

    def send_request(
        self,
        method: str,
        uri: str,
        parameters: Optional[Any] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Response:
        """Send a request to the API host

        Args:
            method: The HTTP method to use
            uri: The URI to request, e.g. "/v1/me"
            parameters: Query string parameters or HTTP body, depending on method
            headers: Extra HTTP headers

        Returns:
            Response envelope

        Raises:
            SpotifyWebAPIError: If the access token could not be refreshed
            AuthError: For authentication failures that were not recovered
            RateLimitedError: When rate limited and auto_retry is off or the retry failed
            ApiError: For other error statuses
            TransportError: If the request could not be sent
        """
        self.request.set_options({"return_assoc": self._options.return_assoc})

        recovered = set()
        while True:
            try:
                response = self.request.api(method, uri, parameters, self._auth_headers(headers))
            except ApiError as e:
                recovery = self._recover(e, recovered)
                if recovery is None:
                    raise
                recovered.add(recovery)
                logger.debug(f"Replaying {method} {uri}")
                continue

            self.last_response = response
            return response

    def _recover(self, error: ApiError, recovered: Set[str]) -> Optional[str]:
        """Prepare a replay of a failed request

        A refresh and a rate limit retry may each happen once, so an expired
        token followed by a 429 is still recovered.

        Args:
            error: The error raised by the last attempt
            recovered: Recoveries already used for this call

        Returns:
            The recovery that was performed, or None to propagate the error

        Raises:
            SpotifyWebAPIError: If the access token could not be refreshed
        """
        if self._options.auto_refresh and REFRESH not in recovered and error.has_expired_token():
            if self.session is None:
                logger.warning("Access token expired but no session is attached to refresh it")
                return None

            logger.info("Access token expired, refreshing")
            if not self.session.refresh_access_token():
                raise SpotifyWebAPIError("Could not refresh access token.") from error
            return REFRESH

        if self._options.auto_retry and RETRY not in recovered and isinstance(error, RateLimitedError):
            logger.warning(f"Rate limited, retrying in {error.retry_after} seconds")
            self._sleep(error.retry_after)
            return RETRY

        return None

    # Tracks

    def get_track(self, track_id: str, options: Optional[Mapping[str, Any]] = None) -> Any:
        """Get a track

        Args:
            track_id: ID or URI of the track
            options: Query options, e.g. {"market": "SE"}

        Returns:
            The track object
        """
        track_id = uri_to_id(track_id, "track")
        return self.send_request("GET", f"/v1/tracks/{track_id}", options).body

    def get_tracks(self, track_ids: IdOrIds, options: Optional[Mapping[str, Any]] = None) -> Any:
        """Get multiple tracks

        Args:
            track_ids: IDs or URIs of the tracks
            options: Query options, e.g. {"market": "SE"}

        Returns:
            An object with a "tracks" list
        """
        parameters = dict(options or {})
        parameters["ids"] = to_comma_string(uri_to_id(track_ids, "track"))
        return self.send_request("GET", "/v1/tracks/", parameters).body

    def add_my_tracks(self, tracks: IdOrIds) -> bool:
        """Save tracks to the current user's library

        Returns:
            Whether the tracks were saved
        """
        body = json.dumps(_as_list(uri_to_id(tracks, "track")))
        return self.send_request("PUT", "/v1/me/tracks", body, JSON_HEADERS).status == 200

    def delete_my_tracks(self, tracks: IdOrIds) -> bool:
        """Remove tracks from the current user's library

        Returns:
            Whether the tracks were removed
        """
        body = json.dumps(_as_list(uri_to_id(tracks, "track")))
        return self.send_request("DELETE", "/v1/me/tracks", body, JSON_HEADERS).status == 200

    # Albums and artists

    def get_album(self, album_id: str, options: Optional[Mapping[str, Any]] = None) -> Any:
        album_id = uri_to_id(album_id, "album")
        return self.send_request("GET", f"/v1/albums/{album_id}", options).body

    def get_artist(self, artist_id: str) -> Any:
        artist_id = uri_to_id(artist_id, "artist")
        return self.send_request("GET", f"/v1/artists/{artist_id}").body

    # Playlists

    def add_playlist_tracks(
        self,
        playlist_id: str,
        tracks: IdOrIds,
        options: Optional[Mapping[str, Any]] = None,
    ) -> Union[str, bool]:
        """Add tracks to a playlist

        Args:
            playlist_id: ID or URI of the playlist
            tracks: IDs or URIs of the tracks
            options: Body options, e.g. {"position": 0}

        Returns:
            The new snapshot ID, or False if none was returned
        """
        body = dict(options or {})
        body["uris"] = _as_list(id_to_uri(tracks, "track"))
        playlist_id = uri_to_id(playlist_id, "playlist")

        response = self.send_request("POST", f"/v1/playlists/{playlist_id}/tracks", json.dumps(body), JSON_HEADERS)
        return get_snapshot_id(response.body)

    # Current user and player

    def me(self) -> Any:
        """Get the current user"""
        return self.send_request("GET", "/v1/me").body

    def get_my_devices(self) -> Any:
        """Get the current user's playback devices"""
        return self.send_request("GET", "/v1/me/player/devices").body

    def pause(self, device_id: str = "") -> bool:
        """Pause playback

        Args:
            device_id: Device to pause, defaults to the active device

        Returns:
            Whether playback was paused
        """
        uri = "/v1/me/player/pause"
        # Query parameters have to be appended by hand for PUT requests
        if device_id:
            uri = f"{uri}?{urlencode({'device_id': device_id})}"

        return self.send_request("PUT", uri).status == 204

    def play(self, device_id: str = "", options: Optional[Mapping[str, Any]] = None) -> bool:
        """Start or resume playback

        Args:
            device_id: Device to play on, defaults to the active device
            options: Body options, e.g. {"uris": [...]} or {"context_uri": "..."}

        Returns:
            Whether playback was started
        """
        uri = "/v1/me/player/play"
        if device_id:
            uri = f"{uri}?{urlencode({'device_id': device_id})}"

        body = json.dumps(dict(options)) if options else None
        return self.send_request("PUT", uri, body, JSON_HEADERS).status == 204
