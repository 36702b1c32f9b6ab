import os
import unicodedata
from urllib.parse import quote
from flask import Response, redirect, stream_with_context
from .errors import DeliveryError

CHUNK_SIZE = 64 * 1024


def attachment_options(filename):
    """Content-Disposition parameters for `filename`, with an RFC 2231 form for non-ASCII names"""
    try:
        filename.encode('ascii')
    except UnicodeEncodeError:
        simple = unicodedata.normalize('NFKD', filename).encode('ascii', 'ignore').decode('ascii')
        return {'filename': simple, 'filename*': "UTF-8''" + quote(filename, safe="!#$&+^`|~")}
    return {'filename': filename}


class DownloadGate:
    """Releases widget assets to confirmed claims only."""

    def __init__(self, claims):
        self.claims = claims

    def open(self, token):
        """Build the response for a download request.

        Raises the lifecycle errors from ClaimService.deliver, or DeliveryError
        when the asset file cannot be opened.
        """
        plan = self.claims.deliver(token)

        if plan.redirect_url:
            # Redirected downloads are never recorded as delivered
            print(f"[Download] Redirecting claim {plan.claim.id} to {plan.redirect_url}")
            return redirect(plan.redirect_url)

        try:
            f = open(plan.file_path, 'rb')
            size = os.fstat(f.fileno()).st_size
        except OSError as e:
            print(f"[Download] Cannot open {plan.file_path}: {e}")
            raise DeliveryError() from e

        print(f"[Download] Streaming {plan.widget.zip} for claim {plan.claim.id}")
        response = Response(
            stream_with_context(self._stream(f, plan)),
            mimetype='application/zip'
        )
        response.headers.set('Content-Disposition', 'attachment', **attachment_options(plan.widget.zip))
        response.headers['Content-Length'] = str(size)
        return response

    def _stream(self, f, plan):
        """Yield the file, then mark the claim delivered once every byte is out"""
        try:
            with f:
                while True:
                    chunk = f.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    yield chunk
        except OSError as e:
            print(f"[Download] Streaming failed for claim {plan.claim.id}: {e}")
            raise

        self.claims.mark_delivered(plan.claim)
