# simple_mcp/fragments/inscription.py
from __future__ import annotations

from simple_mcp.models import InscriptionType
from simple_mcp.services.composer import SnippetComposer, fragment, section

# Shared by the file and image hash fragments
_SHA256_HEX = """\
  const hashBuffer = await crypto.subtle.digest('SHA-256', buffer)
  const hashArray = Array.from(new Uint8Array(hashBuffer))
  const hash = hashArray.map(b => b.toString(16).padStart(2, '0')).join('')"""


@fragment("text", InscriptionType.TEXT)
def inscribe_text() -> str:
    return section("Text Inscription", """
async function inscribeText(wallet: BrowserWallet, text: string) {
  const result = await wallet.inscribeText(text)
  console.log('Text inscribed:', result.txid)
  console.log('Size:', result.dataSize, 'bytes | Basket:', result.basket)
  return result
}
""")


@fragment("json", InscriptionType.JSON)
def inscribe_json() -> str:
    return section("JSON Inscription", """
async function inscribeJSON(wallet: BrowserWallet, data: object) {
  const result = await wallet.inscribeJSON(data)
  console.log('JSON inscribed:', result.txid)
  console.log('Size:', result.dataSize, 'bytes | Basket:', result.basket)
  return result
}
""")


@fragment("file-hash", InscriptionType.FILE_HASH)
def inscribe_file_hash() -> str:
    return section("File Hash Inscription", f"""
async function inscribeFileHash(wallet: BrowserWallet, file: File) {{
  // Compute SHA-256 hash of the file
  const buffer = await file.arrayBuffer()
{_SHA256_HEX}

  const result = await wallet.inscribeFileHash(hash, {{
    description: `Hash of ${{file.name}}`
  }})

  console.log('File hash inscribed:', result.txid)
  console.log('Hash:', hash)
  return {{ ...result, hash, fileName: file.name }}
}}
""")


@fragment("image-hash", InscriptionType.IMAGE_HASH)
def inscribe_image_hash() -> str:
    return section("Image Hash Inscription", f"""
async function inscribeImageHash(wallet: BrowserWallet, imageFile: File) {{
  if (!imageFile.type.startsWith('image/')) {{
    throw new Error('File must be an image')
  }}

  const buffer = await imageFile.arrayBuffer()
{_SHA256_HEX}

  const result = await wallet.inscribeImageHash(hash, {{
    description: `Hash of image ${{imageFile.name}}`
  }})

  console.log('Image hash inscribed:', result.txid)
  return {{ ...result, hash, fileName: imageFile.name }}
}}
""")


composer = SnippetComposer(
    "inscription",
    InscriptionType,
    [inscribe_text, inscribe_json, inscribe_file_hash, inscribe_image_hash],
)
