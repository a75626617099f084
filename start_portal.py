#!/usr/bin/env python3
"""
Customer Status Portal - Main Launcher
Clean startup with proper path handling for the src/ layout
"""
import sys
from pathlib import Path

# Get project root directory
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT / 'src'))

# Fix encoding for Windows
if sys.stdout.encoding != 'utf-8':
    import io
    sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding='utf-8', errors='replace')
    sys.stderr = io.TextIOWrapper(sys.stderr.buffer, encoding='utf-8', errors='replace')


def main():
    """Main entry point"""
    try:
        # Import after path is set
        from config import validate_config
        import config
        from utils.logger import get_logger

        print("\n" + "="*80)
        print(config.PORTAL_TITLE.upper())
        print("="*80)
        print(f"Project Root: {PROJECT_ROOT}")
        print("="*80 + "\n")

        validate_config()
        print("[OK] Configuration validated")

        logger = get_logger(log_level=config.LOG_LEVEL)
        logger.info("Starting Customer Status Portal", component="Main")

        import uvicorn
        from api.main import create_app

        app = create_app()
        logger.info(
            f"Portal running on http://{config.API_HOST}:{config.API_PORT} (Swagger: /docs)",
            component="API",
        )
        uvicorn.run(app, host=config.API_HOST, port=config.API_PORT, log_level="info")

    except Exception as e:
        print(f"\n[FAIL] Failed to start portal: {str(e)}")
        if 'logger' in locals():
            logger.critical(f"Portal startup failed: {str(e)}", component="Main", exc_info=True)
        import traceback
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print("\n\nPortal stopped by user")
        sys.exit(0)
