# springboard/api/auth/services.py
import logging
from datetime import datetime, timezone
from typing import Optional
from firebase_admin import firestore, auth as firebase_auth
from flask import Flask

from springboard.models.user import Identity
from springboard.services.google_auth_service import GoogleAuthService
from springboard.utils.datetime_utils import DateTimeUtils

class AuthService:
    def __init__(self):
        self.db = None
        self.revoked_tokens_ref = None
        self.app: Optional[Flask] = None

    def init_app(self, app: Flask, db=None):
        """앱 초기화 과정에서 호출되어 DB 연결 및 앱 컨텍스트를 설정합니다."""
        self.db = db or firestore.client()
        self.revoked_tokens_ref = self.db.collection('revoked_tokens')
        self.app = app

    # --- Identity Provider 검증 ---
    def verify_identity(self, login_data: dict) -> Identity:
        """
        로그인 요청을 검증해 Identity를 반환합니다.
        - firebase: 클라이언트 팝업 로그인으로 받은 Firebase ID Token 검증
        - google: OAuth 인증 코드를 교환해 userinfo 조회
        """
        provider = login_data['provider']
        if provider == 'firebase':
            decoded = firebase_auth.verify_id_token(login_data['id_token'])
            return Identity(
                uid=decoded['uid'],
                email=decoded.get('email'),
                display_name=decoded.get('name'),
                photo_url=decoded.get('picture'),
            )
        if provider == 'google':
            client_secrets_path = self.app.config.get('GOOGLE_CLIENT_SECRETS_PATH')
            if not client_secrets_path:
                raise ValueError("GOOGLE_CLIENT_SECRETS_PATH is not configured.")
            user_info = GoogleAuthService.exchange_code_for_user_info(
                auth_code=login_data['auth_code'],
                client_secrets_path=client_secrets_path,
                redirect_uri=login_data.get('redirect_uri') or 'postmessage',
            )
            return GoogleAuthService.to_identity(user_info)
        raise ValueError(f"지원하지 않는 로그인 제공자입니다: {provider}")

    # --- Blocklist 관련 로직 ---
    def add_token_to_blocklist(self, jti: str, expires: datetime):
        """전달받은 토큰의 jti를 만료 시간과 함께 Firestore에 저장합니다."""
        try:
            token_data = {
                'revoked_at': DateTimeUtils.now(),
                'expires_at': expires
            }
            self.revoked_tokens_ref.document(jti).set(DateTimeUtils.for_firestore(token_data))
        except Exception as e:
            logging.error(f"Blocklist 토큰 추가 실패 (jti: {jti}): {e}", exc_info=True)
            raise

    def is_token_revoked(self, jwt_payload: dict) -> bool:
        """jti를 이용해 해당 토큰이 무효화 목록에 있는지 확인합니다."""
        jti = jwt_payload['jti']
        doc = self.revoked_tokens_ref.document(jti).get()
        return doc.exists

    def logout_user(self, access_jti: str, access_exp: int, refresh_jti: str, refresh_exp: int):
        """Access 토큰과 Refresh 토큰을 모두 Blocklist에 추가합니다."""
        access_expires = datetime.fromtimestamp(access_exp, tz=timezone.utc)
        refresh_expires = datetime.fromtimestamp(refresh_exp, tz=timezone.utc)
        self.add_token_to_blocklist(access_jti, access_expires)
        self.add_token_to_blocklist(refresh_jti, refresh_expires)
        logging.info(f"사용자 로그아웃 처리 완료. JTI: {access_jti[:8]}..., {refresh_jti[:8]}...")

auth_service = AuthService()
