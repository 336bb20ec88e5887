#!/usr/bin/env python3
"""Issue and verify demo credentials end to end.

A composer (Ed25519) claims creation of a composition and licenses it to a
publisher; a performer (secp256k1) claims a recording and licenses it to a
record label. Each credential is printed in compact form together with the
verifier's verdict. Pass ``--url`` to verify through a running service
instead of in-process.
"""

import argparse
import json

from rightsclaims.claims import (
    Credential,
    create_claims,
    ed25519_header,
    license_claims,
    secp256k1_header,
)
from rightsclaims.core.content import now
from rightsclaims.core.metadata import metadata_id
from rightsclaims.core.party import address_of
from rightsclaims.crypto import ed25519, secp256k1

composer = ed25519.keypair_from_seed(b"\x01" * 32)
publisher = ed25519.keypair_from_seed(b"\x02" * 32)
performer = secp256k1.keypair_from_secret(b"\x03" * 32)
record_label = secp256k1.keypair_from_secret(b"\x04" * 32)

composition = {
    "@context": "http://schema.org/",
    "@type": "Composition",
    "name": "Demo Composition",
    "composer": [address_of(composer.public_key)],
}
recording = {
    "@context": "http://schema.org/",
    "@type": "Recording",
    "name": "Demo Recording",
    "performer": [address_of(performer.public_key)],
}


def _credentials():
    t = now()
    composer_header = ed25519_header(composer.public_key)
    performer_header = secp256k1_header(performer.public_key)
    composer_addr = address_of(composer.public_key)
    performer_addr = address_of(performer.public_key)

    yield "create composition", composition, Credential.issue(
        create_claims(composer_addr, metadata_id(composition), now=t),
        composer_header,
        composer.secret_key,
    )
    yield "license composition", composition, Credential.issue(
        license_claims(
            composer_addr,
            metadata_id(composition),
            [address_of(publisher.public_key)],
            exp=t + 1000,
            now=t,
        ),
        composer_header,
        composer.secret_key,
    )
    yield "create recording", recording, Credential.issue(
        create_claims(performer_addr, metadata_id(recording), now=t),
        performer_header,
        performer.secret_key,
    )
    yield "license recording", recording, Credential.issue(
        license_claims(
            performer_addr,
            metadata_id(recording),
            [address_of(record_label.public_key)],
            exp=t + 2000,
            now=t,
        ),
        performer_header,
        performer.secret_key,
    )


def _verify_remote(url, credential, metadata):
    import httpx

    r = httpx.post(
        f"{url}/credentials/verify",
        json={"token": credential.encode(), "metadata": metadata},
        timeout=30,
    )
    r.raise_for_status()
    return r.json()


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--url", help="Base URL of a running rightsclaims service")
    args = parser.parse_args()

    for label, metadata, credential in _credentials():
        print(f"═══ {label} ═══")
        print(credential.encode())
        if args.url:
            verdict = _verify_remote(args.url.rstrip("/"), credential, metadata)
        else:
            verdict = credential.verify(metadata).to_dict()
        print(json.dumps(verdict, indent=2))


if __name__ == "__main__":
    main()
