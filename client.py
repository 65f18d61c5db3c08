"""
Smoke-test client for the Gemini Image MCP Server over HTTP/JSON-RPC.

Start the server with MCP_TRANSPORT=http, then run this client. It performs
the MCP initialize handshake, lists the tools and calls generate_image.
"""
import argparse
import base64
import json
import sys
from typing import Any, Dict, List, Optional

import requests

MCP_ENDPOINT = "http://127.0.0.1:7801/mcp"
PROTOCOL_VERSION = "2025-03-26"
REQUEST_TIMEOUT = 300  # image generation can be slow
REQUEST_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json, text/event-stream",
}


def parse_sse_response(response_text: str) -> dict:
    """Parse Server-Sent Events (SSE) response format."""
    lines = response_text.replace("\r\n", "\n").split("\n")
    for line in lines:
        line = line.strip()
        if line.startswith("data: "):
            json_str = line[6:]
            try:
                return json.loads(json_str)
            except json.JSONDecodeError:
                continue
    raise ValueError("No valid JSON data found in SSE response")


class MCPHttpClient:
    """Minimal streamable-HTTP JSON-RPC client holding one MCP session"""

    def __init__(self, endpoint: str = MCP_ENDPOINT, timeout: int = REQUEST_TIMEOUT):
        self.endpoint = endpoint
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update(REQUEST_HEADERS)
        self.session_id: Optional[str] = None
        self._next_id = 1

    def _post(self, payload: Dict[str, Any]) -> requests.Response:
        headers = {"mcp-session-id": self.session_id} if self.session_id else {}
        response = self.session.post(
            self.endpoint, json=payload, headers=headers, timeout=self.timeout
        )
        response.raise_for_status()
        return response

    def request(self, method: str, params: Dict[str, Any]) -> dict:
        """Send a JSON-RPC request and return the parsed response message"""
        payload = {"jsonrpc": "2.0", "id": self._next_id, "method": method, "params": params}
        self._next_id += 1
        response = self._post(payload)
        session_id = response.headers.get("mcp-session-id")
        if session_id:
            self.session_id = session_id

        content_type = response.headers.get("content-type", "")
        if "text/event-stream" in content_type:
            return parse_sse_response(response.text)
        return response.json()

    def initialize(self) -> dict:
        result = self.request(
            "initialize",
            {
                "protocolVersion": PROTOCOL_VERSION,
                "capabilities": {},
                "clientInfo": {"name": "gemini-image-smoke-client", "version": "0.1.0"},
            },
        )
        self._post({"jsonrpc": "2.0", "method": "notifications/initialized"})
        return result

    def list_tools(self) -> List[dict]:
        result = self.request("tools/list", {})
        return result.get("result", {}).get("tools", [])

    def call_tool(self, tool_name: str, arguments: Dict[str, Any]) -> dict:
        """Call a tool; raises RuntimeError on JSON-RPC or tool errors"""
        result = self.request("tools/call", {"name": tool_name, "arguments": arguments})
        if "error" in result:
            raise RuntimeError(f"Server error: {json.dumps(result['error'])}")
        data = result.get("result", {})
        if data.get("isError"):
            texts = [item.get("text", "") for item in data.get("content", [])]
            raise RuntimeError(f"Tool '{tool_name}' failed: {' '.join(texts)}")
        return data


def first_image(tool_result: dict) -> Optional[dict]:
    """Return the first image content item of a tools/call result"""
    for item in tool_result.get("content", []):
        if item.get("type") == "image":
            return item
    return None


def print_section(title: str, width: int = 60):
    """Print a formatted section header."""
    print("\n" + "=" * width)
    print(title.center(width))
    print("=" * width)


def run_smoke_test(endpoint: str, prompt: str, output: Optional[str] = None) -> bool:
    client = MCPHttpClient(endpoint)

    print_section("Gemini Image MCP Smoke Client")
    info = client.initialize().get("result", {}).get("serverInfo", {})
    print(f"Connected to {info.get('name', 'unknown')} (session {client.session_id})")

    print_section("Listing available tools...")
    tools = client.list_tools()
    for tool in tools:
        print(f"  • {tool.get('name', 'unknown')}: {tool.get('description', '')}")
    if not any(tool.get("name") == "generate_image" for tool in tools):
        print("\n❌ generate_image is not registered on the server.")
        return False

    print_section("Calling generate_image...")
    result = client.call_tool("generate_image", {"prompt": prompt})
    for item in result.get("content", []):
        if item.get("type") == "text":
            print(f"  {item['text'][:80]}")

    image = first_image(result)
    if image is None:
        print("\n❌ No image in response.")
        return False
    print(f"\n✅ Received {image['mimeType']} image ({len(image['data'])} base64 chars)")
    if output:
        with open(output, "wb") as handle:
            handle.write(base64.b64decode(image["data"]))
        print(f"  Wrote {output}")
    return True


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Smoke-test client for Gemini Image MCP Server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python client.py
  python client.py -p "a red cube on a wooden table" -o cube.png
  python client.py --endpoint http://127.0.0.1:9000/mcp
        """
    )
    parser.add_argument("-p", "--prompt", default="a red cube", help="Prompt text for image generation")
    parser.add_argument("-o", "--output", default=None, help="Write the returned image to this file")
    parser.add_argument("--endpoint", default=MCP_ENDPOINT, help="MCP HTTP endpoint URL")
    args = parser.parse_args()

    try:
        ok = run_smoke_test(args.endpoint, args.prompt, args.output)
    except KeyboardInterrupt:
        print("\n\n⚠️  Test interrupted by user.")
        sys.exit(1)
    except (requests.RequestException, RuntimeError, ValueError) as e:
        print(f"\n❌ {e}")
        sys.exit(1)
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
