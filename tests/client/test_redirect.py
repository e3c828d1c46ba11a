"""Tests for building and following the gateway authorization URL.

High-impact tests covering both redirect profiles:
- Fixed parameter order and optional parameter handling
- Dev mode switching for full and simple profiles
- Fail-fast construction before any navigation
"""

from urllib.parse import parse_qs, urlparse

import pytest

from ziqx_auth.client.models.config import ZAuthSettings
from ziqx_auth.client.models.errors import InvalidConfiguration
from ziqx_auth.client.models.flow import FullAuthorizationRequest
from ziqx_auth.client.services.navigation import RecordingNavigator
from ziqx_auth.client.services.redirect import AuthorizationRedirector


def make_settings() -> ZAuthSettings:
    return ZAuthSettings(
        base_url="https://auth.example.com/login",
        dev_base_url="http://localhost:5173/login",
    )


class TestFullProfile:
    """Test the full PKCE redirect profile."""

    def setup_method(self):
        # Arrange
        self.navigator = RecordingNavigator()
        self.settings = make_settings()

    def test_login_navigates_with_all_parameters_in_order(self):
        """Test the end-to-end URL with every optional parameter supplied."""
        # Arrange
        redirector = AuthorizationRedirector.full(
            auth_key="k1",
            redirect_url="http://localhost:3000/cb",
            code_challenge="chal123",
            code_challenge_method="S256",
            state="s1",
            navigator=self.navigator,
            settings=self.settings,
        )

        # Act
        result = redirector.login()

        # Assert
        assert result is None
        assert self.navigator.visited == [
            "https://auth.example.com/login?key=k1&redir=http://localhost:3000/cb"
            "&code_challenge=chal123&challenge_method=S256&state=s1"
        ]

    def test_optional_parameters_omitted_when_absent(self):
        """Test that challenge_method and state are left out entirely."""
        # Arrange
        redirector = AuthorizationRedirector.full(
            auth_key="k1",
            redirect_url="http://localhost:3000/cb",
            code_challenge="chal123",
            navigator=self.navigator,
            settings=self.settings,
        )

        # Act
        url = redirector.authorization_url()

        # Assert
        assert url.endswith("?key=k1&redir=http://localhost:3000/cb&code_challenge=chal123")
        assert "challenge_method" not in url
        assert "state" not in url

    def test_empty_optional_parameters_are_not_sent(self):
        """Test that empty strings count as not supplied."""
        # Arrange
        redirector = AuthorizationRedirector.full(
            auth_key="k1",
            redirect_url="http://localhost:3000/cb",
            code_challenge="chal123",
            code_challenge_method="",
            state="",
            navigator=self.navigator,
            settings=self.settings,
        )

        # Act
        url = redirector.authorization_url()

        # Assert
        assert "challenge_method=" not in url
        assert "state=" not in url

    def test_state_only_follows_code_challenge(self):
        """Test state without challenge method keeps the fixed order."""
        # Arrange
        redirector = AuthorizationRedirector.full(
            auth_key="k1",
            redirect_url="http://localhost:3000/cb",
            code_challenge="chal123",
            state="s1",
            navigator=self.navigator,
            settings=self.settings,
        )

        # Act
        url = redirector.authorization_url()

        # Assert
        assert url.endswith("&code_challenge=chal123&state=s1")

    def test_dev_mode_uses_development_gateway(self):
        """Test that dev mode swaps the base URL and adds no extra flag."""
        # Arrange
        redirector = AuthorizationRedirector.full(
            auth_key="k1",
            redirect_url="http://localhost:3000/cb",
            code_challenge="chal123",
            navigator=self.navigator,
            settings=self.settings,
        )

        # Act
        redirector.login(dev_mode=True)

        # Assert
        parsed = urlparse(self.navigator.last_url)
        assert parsed.netloc == "localhost:5173"
        assert parsed.path == "/login"
        assert "dev" not in parse_qs(parsed.query)

    def test_reserved_characters_in_values_are_encoded(self):
        """Test that values cannot inject extra query parameters."""
        # Arrange
        redirector = AuthorizationRedirector.full(
            auth_key="k1",
            redirect_url="http://localhost:3000/cb?next=/home&x=1",
            code_challenge="chal123",
            state="a&b",
            navigator=self.navigator,
            settings=self.settings,
        )

        # Act
        url = redirector.authorization_url()
        query_params = parse_qs(urlparse(url).query)

        # Assert
        assert query_params["redir"] == ["http://localhost:3000/cb?next=/home&x=1"]
        assert query_params["state"] == ["a&b"]
        assert list(query_params) == ["key", "redir", "code_challenge", "state"]

    @pytest.mark.parametrize(
        "missing",
        ["auth_key", "redirect_url", "code_challenge"],
    )
    def test_missing_required_parameter_fails_before_navigation(self, missing):
        """Test that construction fails when a required field is empty."""
        # Arrange
        kwargs = {
            "auth_key": "k1",
            "redirect_url": "http://localhost:3000/cb",
            "code_challenge": "chal123",
        }
        kwargs[missing] = ""

        # Act & Assert
        with pytest.raises(InvalidConfiguration) as exc_info:
            AuthorizationRedirector.full(navigator=self.navigator, **kwargs)

        assert missing in str(exc_info.value)
        assert self.navigator.visited == []

    def test_none_required_parameter_fails(self):
        """Test that an absent (None) required field is rejected too."""
        # Act & Assert
        with pytest.raises(InvalidConfiguration):
            FullAuthorizationRequest(
                auth_key="k1",
                redirect_url=None,
                code_challenge="chal123",
            )


class TestSimpleProfile:
    """Test the key-only redirect profile."""

    def setup_method(self):
        # Arrange
        self.navigator = RecordingNavigator()
        self.redirector = AuthorizationRedirector.simple(
            "k2", navigator=self.navigator, settings=make_settings()
        )

    def test_dev_login_appends_dev_flag(self):
        """Test the end-to-end simple dev-mode URL."""
        # Act
        self.redirector.login(True)

        # Assert
        assert "key=k2&dev=true" in self.navigator.last_url
        assert self.navigator.last_url.startswith("https://auth.example.com/login?")

    def test_login_without_dev_mode_sends_key_only(self):
        """Test that the dev flag is absent outside dev mode."""
        # Act
        self.redirector.login()

        # Assert
        assert self.navigator.last_url == "https://auth.example.com/login?key=k2"

    def test_missing_key_fails(self):
        """Test that the simple profile still requires a key."""
        # Act & Assert
        with pytest.raises(InvalidConfiguration):
            AuthorizationRedirector.simple("", navigator=self.navigator)


class TestDefaultNavigator:
    """Test the browser navigator used when none is injected."""

    def test_login_opens_system_browser(self, monkeypatch):
        """Test that the default navigator delegates to webbrowser."""
        # Arrange
        opened = []
        monkeypatch.setattr(
            "ziqx_auth.client.services.navigation.webbrowser.open",
            lambda url: opened.append(url) or True,
        )
        redirector = AuthorizationRedirector.simple("k2", settings=make_settings())

        # Act
        redirector.login()

        # Assert
        assert opened == ["https://auth.example.com/login?key=k2"]
