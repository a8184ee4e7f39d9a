# sshkeykit

Pure-Python building blocks for working with OpenSSH keys and the files
that hold them.

## What it covers

- **Algorithms** — `Algorithm`, `EcdsaCurve`, `HashAlg` and `KdfAlg` map
  OpenSSH algorithm identifiers (such as `ssh-ed25519` or
  `ecdsa-sha2-nistp256`) to values and back, including the certificate
  variants. Unknown `name@domain` identifiers are kept as `AlgorithmName`.
- **Wire encoding** — `Reader` and `Writer` handle the length-prefixed
  `uint32`/`uint64`/`string` encoding used throughout the SSH protocol.
- **Comments** — `Comment` stores arbitrary bytes and gives the longest
  valid UTF-8 prefix through `as_str_lossy()`.
- **Key derivation** — `Kdf` encodes and decodes the KDF section of
  OpenSSH private keys and derives keys with bcrypt-pbkdf.
- **Fingerprints** — `Fingerprint` parses and prints `SHA256:...` strings
  and renders the "drunken bishop" randomart picture.
- **Certificate fields** — `CertType`, `Field`, `OptionsMap` and `UnixTime`.
- **Files** — `AuthorizedKeys` and `KnownHosts` parse `authorized_keys`
  and `known_hosts` files entry by entry.

## Installing

```
pip install sshkeykit
```

## Examples

Parse a fingerprint and draw its randomart:

```python
from sshkeykit.fingerprint import Fingerprint

fp = Fingerprint.parse("SHA256:UCUiLr7Pjs9wFFJMDByLgc3NrtdU344OgUM45wZPcIQ")
print(fp.prefix())
print(fp.to_randomart("[ED25519 256]"))
```

Look up an algorithm by its identifier:

```python
from sshkeykit.algorithm import Algorithm

alg = Algorithm.new("ecdsa-sha2-nistp256")
assert alg.is_ecdsa()
print(alg.to_certificate_type())
```

Walk an `authorized_keys` file:

```python
from sshkeykit.authorized_keys import AuthorizedKeys

for entry in AuthorizedKeys.read_file("authorized_keys"):
    print(entry)
```

Read the host patterns in a `known_hosts` file:

```python
from sshkeykit.known_hosts import KnownHosts

for entry in KnownHosts.read_file("known_hosts"):
    print(entry)
```

## Errors

Every failure raises a subclass of `sshkeykit.errors.SshKeyError`, for
example `FormatEncodingError` for a malformed line or `LabelError` for an
unknown identifier.

## Tests

```
pip install -e ".[test]"
pytest
```