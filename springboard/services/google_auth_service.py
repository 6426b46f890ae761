# springboard/services/google_auth_service.py

import logging
import requests
from google_auth_oauthlib.flow import Flow

from springboard.models.user import Identity

class GoogleAuthService:
    """실제 Google OAuth 2.0 통신을 담당하는 서비스 클래스입니다."""
    _user_info_url = "https://www.googleapis.com/oauth2/v3/userinfo"
    _scopes = [
        "https://www.googleapis.com/auth/userinfo.profile",
        "https://www.googleapis.com/auth/userinfo.email",
        "openid"
    ]

    @staticmethod
    def exchange_code_for_user_info(auth_code: str, client_secrets_path: str, redirect_uri: str) -> dict:
        """
        인증 코드를 Access Token으로 교환하고, 이를 사용해 사용자 정보를 가져옵니다.
        """
        try:
            # 1. OAuth 2.0 Flow 객체를 생성합니다.
            flow = Flow.from_client_secrets_file(client_secrets_path, scopes=GoogleAuthService._scopes)
            flow.redirect_uri = redirect_uri

            # 2. 인증 코드를 사용해 토큰으로 교환합니다.
            flow.fetch_token(code=auth_code)
            credentials = flow.credentials

            # 3. Access Token을 사용하여 사용자 정보를 요청합니다.
            response = requests.get(
                GoogleAuthService._user_info_url,
                headers={"Authorization": f"Bearer {credentials.token}"}
            )
            response.raise_for_status()
            return response.json()

        except Exception as e:
            logging.error(f"Google OAuth failed: {e}", exc_info=True)
            raise

    @staticmethod
    def to_identity(user_info: dict) -> Identity:
        """Google userinfo 응답을 Identity로 변환합니다. 'sub'가 고유 ID입니다."""
        google_id = user_info.get('sub')
        if not google_id:
            raise ValueError("Google user info must contain 'sub' (google_id).")
        return Identity(
            uid=google_id,
            email=user_info.get('email'),
            display_name=user_info.get('name'),
            photo_url=user_info.get('picture'),
        )
