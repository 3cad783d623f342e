from campaign_proxy.api.main import main

main()
