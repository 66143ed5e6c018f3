TEST_REGION = "us-east-1"
TEST_INSTANCE_TYPE = "t3.medium"
TEST_AMI_ID = "ami-12c6146b"
