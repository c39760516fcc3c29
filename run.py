import argparse
import uvicorn
from vistagram.core.config import settings

def main():
    parser = argparse.ArgumentParser(description="Run the Vistagram API server")
    parser.add_argument(
        "--host",
        default=settings.HOST,
        help=f"Host to run the server on (default: {settings.HOST})"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=settings.PORT,
        help=f"Port to run the server on (default: {settings.PORT})"
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload on code changes (default: based on DEBUG setting)"
    )

    args = parser.parse_args()

    use_reload = args.reload or settings.DEBUG

    if settings.DEBUG:
        print(f"Starting Vistagram API in {settings.ENVIRONMENT} mode")
        print(f"Auto-reload: {'enabled' if use_reload else 'disabled'}")
        print(f"Server running at http://{args.host}:{args.port}")
        print(f"Health check: http://{args.host}:{args.port}{settings.API_PREFIX}/health")
        print(f"  - Swagger UI: http://{args.host}:{args.port}/docs")

    uvicorn.run(
        "vistagram.main:app",
        host=args.host,
        port=args.port,
        reload=use_reload
    )

if __name__ == "__main__":
    main()
